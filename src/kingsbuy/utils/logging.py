import sys
from typing import Any, Dict, List, Optional, TextIO

class EventLog:
    def __init__(self) -> None:
        self.records: List[Dict[str,Any]] = []
    def emit(self, rec: Dict[str,Any]) -> None:
        self.records.append(rec)
    def of_kind(self, a: str) -> List[Dict[str,Any]]:
        return [r for r in self.records if r.get("a") == a]

def progress(tag: str, msg: str, stream: Optional[TextIO] = None) -> None:
    """Diagnostic line on stderr; stdout is reserved for the record stream."""
    print(f"[{tag}] {msg}", file=stream or sys.stderr, flush=True)
