import os, sys
BASE = os.getenv("TOTP_SERVICE_HOME", "/opt/totp-service")
if os.path.isdir(BASE) and BASE not in sys.path:
    sys.path.insert(0, BASE)

from totp_service import create_app

# gunicorn: wsgi:app
app = create_app()
