class MandelgridError(Exception):
    pass

class ConfigurationError(MandelgridError, ValueError):
    """Raised before a render pass when the region, grid or iteration cap is unusable."""
