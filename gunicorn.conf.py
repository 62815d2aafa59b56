import os

# Server Socket
bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"
backlog = 512

# Single shop, light traffic: a few workers with threads for I/O waits.
workers = int(os.environ.get('WEB_CONCURRENCY', 3))
worker_class = 'gthread'
threads = 4

# Timeouts
timeout = 60
keepalive = 5

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Process Naming
proc_name = 'shoetrack_app'

# Requests
max_requests = 1000
max_requests_jitter = 50

# Environment
raw_env = [
    f"TZ={os.environ.get('TZ', 'Africa/Lagos')}"
]
