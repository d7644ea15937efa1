from .streams import Logger

LOGGER_NAME = "genawait"

genawait_logger = Logger()
