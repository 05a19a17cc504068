"""
Exceptions shared by the intake API and the log processor
"""


class ConfigurationError(Exception):
    """Raised when a required environment setting is missing"""
    pass
