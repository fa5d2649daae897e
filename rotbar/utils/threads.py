import threading
from collections.abc import Callable


def run_as_daemon(func: Callable) -> Callable:
    """
    Decorator for blocking readers and listeners.
    Spawns a dedicated thread so it never holds up the bar loop.
    """
    def wrapper(*args, **kwargs):
        # daemon=True means this thread will die automatically if the bar quits
        t = threading.Thread(target=func, args=args, kwargs=kwargs, daemon=True)
        t.start()
        return t
    return wrapper
