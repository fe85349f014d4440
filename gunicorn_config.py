"""
Gunicorn config: bind to 0.0.0.0 and PORT for Railway/Render.
The contact form gate lives in the signed session cookie, so workers share nothing.
"""
import os

bind = "0.0.0.0:{}".format(os.environ.get("PORT", "8080"))
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
threads = 2
timeout = 60
accesslog = "-"
