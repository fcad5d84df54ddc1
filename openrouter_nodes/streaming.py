"""
Parsing of server-sent-events style response bodies
"""

import json
from typing import Any, List

FRAME_DELIMITER = "\n\n"
DATA_PREFIX = "data: "


class StreamParseError(ValueError):
    """Raised when a frame does not carry a JSON value"""

    def __init__(self, index: int, frame: str, reason: str):
        self.index = index
        self.frame = frame
        super().__init__(f"Invalid JSON in stream frame {index}: {reason}")


def split_frames(body: str) -> List[str]:
    return [frame for frame in body.split(FRAME_DELIMITER) if frame.strip() != ""]


def parse_event_stream(body: str) -> List[Any]:
    """Parse every frame of ``body`` as an independent JSON value.

    Frames are kept in arrival order. Only the first ``data: `` prefix of a
    frame is removed, and partial JSON is never joined across frames.
    """
    parsed: List[Any] = []
    for index, frame in enumerate(split_frames(body)):
        payload = frame.replace(DATA_PREFIX, "", 1)
        try:
            parsed.append(json.loads(payload))
        except json.JSONDecodeError as e:
            raise StreamParseError(index, frame, e.msg) from e
    return parsed
