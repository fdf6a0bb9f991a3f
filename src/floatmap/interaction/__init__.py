# src/floatmap/interaction/__init__.py
from .controller import InteractionController, InteractionState
from .timer import AnimationTimer

__all__ = ['InteractionController', 'InteractionState', 'AnimationTimer']
