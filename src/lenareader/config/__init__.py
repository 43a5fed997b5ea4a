from lenareader.config.options import ReadOptions
from lenareader.config.validate import validate

__all__ = ['ReadOptions', 'validate']
