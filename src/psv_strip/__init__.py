"""PSV Strip - Strip or restore PSV header and license information."""
__version__ = "1.0.0"
