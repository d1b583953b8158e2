"""
Application state shared across requests.

Holds the settings and the strategy bindings in use.
Attached to app.state by create_app.
"""

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from src.api.config import Settings
    from src.requestid import IDInjectorOptions


@dataclass
class AppState:
    """Application state attached to the FastAPI app."""

    settings: Optional["Settings"] = None
    injector_options: Optional["IDInjectorOptions"] = None
    start_time: float = field(default_factory=time.time)

    @property
    def uptime_seconds(self) -> float:
        return time.time() - self.start_time
