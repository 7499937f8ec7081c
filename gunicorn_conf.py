# Gunicorn settings for the lint service in containers.
# Linting is CPU-bound and short, so a few workers with a tight timeout.

wsgi_app = "lpsql_lint.main:app"
bind = "0.0.0.0:10000"
worker_class = "uvicorn.workers.UvicornWorker"
workers = 2
threads = 4
timeout = 30

accesslog = "-"
errorlog = "-"
loglevel = "info"
capture_output = True

# Keep output unbuffered for real-time diagnostics.
enable_stdio_inheritance = True
