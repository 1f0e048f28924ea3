"""Resolution of the logger and output streams used by the Terraform helpers."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, List, Optional, Sequence

STANDARD = "standard"
FILE = "file"
KNOWN_STREAMS = (STANDARD, FILE)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class TeeWriter:
    """Write text to several underlying streams at once."""

    def __init__(self, devices: Iterable[IO[str]]) -> None:
        self.devices: List[IO[str]] = list(devices)

    def write(self, text: str) -> int:
        for device in self.devices:
            device.write(text)
        return len(text)

    def flush(self) -> None:
        for device in self.devices:
            device.flush()

    def writable(self) -> bool:
        return True


@dataclass(slots=True)
class ResolvedStreams:
    logger: logging.Logger
    stdout: IO[str]
    stderr: IO[str]
    opened: List[IO[str]] = field(default_factory=list)

    def close(self) -> None:
        """Close any file this resolution opened."""

        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler):
                handler.close()
        for device in self.opened:
            device.close()
        self.opened.clear()


def resolve_streams(
    streams: Sequence[str] = (),
    level: int = logging.INFO,
    file_path: Path | str | None = None,
    logger: Optional[logging.Logger] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> ResolvedStreams:
    """Return the logger and output streams for the selected ``streams``.

    ``"standard"`` routes to ``sys.stdout``/``sys.stderr`` and ``"file"``
    appends to ``file_path``. Explicitly supplied objects are used as given.
    With no streams selected, output is discarded.
    """

    selected = list(streams)
    unknown = [stream for stream in selected if stream not in KNOWN_STREAMS]
    if unknown:
        raise ValueError(f"Unknown stream(s): {', '.join(unknown)}")
    if FILE in selected and file_path is None:
        raise ValueError("File logging requested but no file path provided")

    opened: List[IO[str]] = []
    file_device: Optional[IO[str]] = None
    if FILE in selected:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)  # type: ignore[arg-type]
    if FILE in selected and (stdout is None or stderr is None):
        file_device = Path(file_path).open("a", encoding="utf-8")  # type: ignore[arg-type]
        opened.append(file_device)

    def devices(standard: IO[str]) -> List[IO[str]]:
        selected_devices: List[IO[str]] = []
        if file_device is not None:
            selected_devices.append(file_device)
        if STANDARD in selected:
            selected_devices.append(standard)
        return selected_devices

    return ResolvedStreams(
        logger=logger or _build_logger(selected, level, file_path),
        stdout=stdout if stdout is not None else TeeWriter(devices(sys.stdout)),  # type: ignore[arg-type]
        stderr=stderr if stderr is not None else TeeWriter(devices(sys.stderr)),  # type: ignore[arg-type]
        opened=opened,
    )


def _build_logger(
    streams: Sequence[str], level: int, file_path: Path | str | None
) -> logging.Logger:
    # Standalone logger, not registered with the logging manager.
    resolved = logging.Logger("terraform_testkit.terraform", level)
    formatter = logging.Formatter(LOG_FORMAT)
    if FILE in streams and file_path is not None:
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        resolved.addHandler(file_handler)
    if STANDARD in streams:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        resolved.addHandler(stream_handler)
    if not resolved.handlers:
        resolved.addHandler(logging.NullHandler())
    return resolved


__all__ = ["FILE", "STANDARD", "ResolvedStreams", "TeeWriter", "resolve_streams"]
