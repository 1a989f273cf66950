import multiprocessing, os
# gunicorn -c gunicorn.conf.py  (settings below, env overrides in .env)
wsgi_app = "wsgi:app"
proc_name = "totp-service"
bind = os.getenv("TOTP_BIND", "unix:/run/totp-service/totp-service.sock")
# secret issuing is CPU-light; a few sync workers are plenty
workers = int(os.getenv("TOTP_WORKERS", str(min(4, multiprocessing.cpu_count() + 1))))
worker_class = "sync"
timeout = int(os.getenv("TOTP_TIMEOUT", "10"))
graceful_timeout = 10
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
