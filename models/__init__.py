from .database import db
from .module import Module
from .index_class import IndexClass

__all__ = ['db', 'Module', 'IndexClass']
