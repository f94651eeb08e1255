from linkfast.utils import initialize_logging


initialize_logging()
