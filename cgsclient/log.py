from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional, TextIO, Tuple

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# debug level given by the user -> logging level of the messages it enables
DEBUG_LEVELS = {
    1: logging.INFO,
    2: logging.DEBUG,
    3: TRACE,
}


def level_for(debug: int) -> int:
    if debug <= 0:
        return logging.WARNING
    return DEBUG_LEVELS.get(debug, TRACE)


class PlayerLogAdapter(logging.LoggerAdapter):
    # "[player] (operation) msg"; operation comes from the fct= keyword
    def __init__(self, logger: logging.Logger, player: str = "") -> None:
        super().__init__(logger, {"player": player})

    @property
    def player(self) -> str:
        return self.extra["player"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        fct = kwargs.pop("fct", "-")
        kwargs["extra"] = {**self.extra, "operation": fct, **kwargs.get("extra", {})}
        return f"[{self.player}] ({fct}) {msg}", kwargs

    def trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(TRACE, msg, *args, **kwargs)


def configure_logging(debug: int = 0, stream: Optional[TextIO] = None) -> None:
    logging.basicConfig(
        level=level_for(debug),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=stream,
    )
