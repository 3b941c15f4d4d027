from .apply import apply
from .current import current
from .plan import plan
from .whoami import whoami

__all__ = ["apply", "current", "plan", "whoami"]
