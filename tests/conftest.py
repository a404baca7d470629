import os


os.environ.setdefault("RPC_OPENAPI_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")
