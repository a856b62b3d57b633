import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("LOG_FILE", "logs/coaching_attendance.log")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
