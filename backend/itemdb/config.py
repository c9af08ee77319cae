APP_VERSION = "0.1.0"

HOST = "0.0.0.0"
PORT = 8080

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
