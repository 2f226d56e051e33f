class ConfigurationError(RuntimeError):
    # # Raised when required configuration, such as the Gemini API key, is missing
    pass
