from .config import Config
from .runner import StepResult, run_queries, run_steps
from .seed import load_books, seed_books
from .steps import STEPS, Step, select_steps

__all__ = [
    'Config',
    'STEPS',
    'Step',
    'StepResult',
    'load_books',
    'run_queries',
    'run_steps',
    'seed_books',
    'select_steps',
]
