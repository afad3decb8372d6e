class ConfigurationError(Exception):
    """Raised when a pack document cannot be turned into runnable commands.

    Configuration errors are fatal at load time: no handler is produced for
    the offending command and nothing is registered with the host runtime.
    """
