port = 1451
bind = f'0.0.0.0:{port}'
timeout = 60

# loglevel = 'debug'
accesslog = 'logs/access.log'
errorlog = 'logs/error.log'

# one process, the dispatcher threads live inside it
workers = 1
worker_class = 'gthread'
threads = 2
wsgi_app = 'app:create_app()'
