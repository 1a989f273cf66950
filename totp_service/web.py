import logging, time
from flask import Blueprint, current_app, jsonify

from .errors import TotpError

bp = Blueprint("web", __name__)
log = logging.getLogger(__name__)

START_TS = time.time()

@bp.get("/secret")
def secret():
    totp = current_app.extensions["totp"]
    try:
        value = totp.generate_secret()
    except TotpError as e:
        log.exception("Secret generation failed")
        resp = jsonify(error=str(e))
        resp.status_code = 500
    else:
        # never log the secret itself
        log.info("Issued new TOTP secret (%d chars)", len(value))
        resp = jsonify(secret=value)
    resp.headers["Cache-Control"] = "no-store"
    return resp

@bp.get("/healthz")
def healthz():
    # Liveness: process is up
    return jsonify(status="ok", uptime_seconds=round(time.time() - START_TS, 1))

@bp.get("/readyz")
def readyz():
    # Readiness: engine was built from valid settings in create_app()
    if "totp" not in current_app.extensions:
        return jsonify(status="not ready"), 503
    return jsonify(status="ready")
