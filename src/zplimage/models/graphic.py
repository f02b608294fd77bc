"""Label graphic models."""

from pydantic import BaseModel, ConfigDict, computed_field


class LabelDimensions(BaseModel):
    """Resolved bitmap size in dots, byte-aligned on both axes."""

    model_config = ConfigDict(frozen=True)

    width: int
    height: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def bytes_per_row(self) -> int:
        """Bytes needed for one row of the bitmap."""
        return (self.width + 7) // 8

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_bytes(self) -> int:
        """Bytes needed for the whole bitmap."""
        return self.bytes_per_row * self.height


class GraphicField(BaseModel):
    """Result of converting an image to a ZPL graphic field."""

    model_config = ConfigDict(frozen=True)

    dimensions: LabelDimensions
    data: bytes
    hex_payload: str
    command: str

    def command_bytes(self) -> bytes:
        """Return the command encoded for a transmission layer."""
        return self.command.encode("ascii")
