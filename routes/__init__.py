from .main import main_bp
from .catalogue import catalogue_bp
from .planner import planner_bp

__all__ = ['main_bp', 'catalogue_bp', 'planner_bp']
