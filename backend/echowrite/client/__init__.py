from .service import EchoWriteClient, RelayError, PanelResults
from .state import ClientState, HistoryItem, UserSnapshot

__all__ = [
	"EchoWriteClient",
	"RelayError",
	"PanelResults",
	"ClientState",
	"HistoryItem",
	"UserSnapshot",
]
