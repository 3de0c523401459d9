"""tapline: a Test Anything Protocol producer.

Quick Start:
    from tapline import Session

    with Session(plan=3) as t:
        t.record(1 < 255, "integer comparison works")
        t.equals(sorted([3, 1, 2]), [1, 2, 3], "sorting works")
        with t.derive("exercising exceptions") as st:
            st.raises(lambda: [][0], "index out of range", kind=IndexError)

    # or, procedurally, against the process-wide default session:
    from tapline.facade import *
    plan(1)
    ok(True, "the first one's free")

Command line:
    tapline run t/basic.py
"""

from .errors import TapError, AlreadyPlanned, AlreadyFinished, LatePlan
from .session import Session
from .sink import Sink, StreamSink, MemorySink, IndentedSink
from .config import TapConfig, load_config
from .render import can_render, render, register_renderer
from .matchers import as_predicate, pattern_predicate
from .directives import Directive

__version__ = "0.1.0"

__all__ = [
    # Session
    "Session",
    # Errors
    "TapError",
    "AlreadyPlanned",
    "AlreadyFinished",
    "LatePlan",
    # Output
    "Sink",
    "StreamSink",
    "MemorySink",
    "IndentedSink",
    # Configuration
    "TapConfig",
    "load_config",
    # Diagnostics and matching
    "can_render",
    "render",
    "register_renderer",
    "as_predicate",
    "pattern_predicate",
    "Directive",
]
