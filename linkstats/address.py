"""48-bit link-layer addresses used as keys for per-destination state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class MacAddress:
    """Six raw bytes; equality and ordering follow the bytes."""

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray)) or len(self.raw) != 6:
            raise ValueError(f"MAC address needs 6 bytes, got {self.raw!r}")
        object.__setattr__(self, "raw", bytes(self.raw))

    @classmethod
    def parse(cls, text: str) -> "MacAddress":
        parts = text.strip().replace("-", ":").split(":")
        if len(parts) != 6:
            raise ValueError(f"invalid MAC address {text!r}")
        try:
            return cls(bytes(int(part, 16) for part in parts))
        except ValueError as exc:
            raise ValueError(f"invalid MAC address {text!r}") from exc

    @classmethod
    def from_index(cls, index: int) -> "MacAddress":
        """Sequential locally allocated address, e.g. 00:00:00:00:00:01."""
        return cls(index.to_bytes(6, "big"))

    @classmethod
    def coerce(cls, value) -> "MacAddress":
        if isinstance(value, MacAddress):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls(value)

    @property
    def is_broadcast(self) -> bool:
        return self.raw == b"\xff" * 6

    def __str__(self) -> str:
        return ":".join(f"{b:02x}" for b in self.raw)


BROADCAST = MacAddress(b"\xff" * 6)
