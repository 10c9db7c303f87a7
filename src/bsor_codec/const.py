ERRORS = {
  "E_MAGIC": "Replay magic number mismatch",
  "E_VERSION": "Unsupported replay version",
  "E_TRUNCATED": "Replay data ends before the field does",
  "E_SECTION_TAG": "Unknown replay section tag",
}


class ReplayDecodeError(ValueError):
    """Terminal decode failure. No partial record is produced."""

    def __init__(self, code: str, offset: int, detail: str | None = None):
        self.code = code
        self.offset = offset
        self.detail = detail
        msg = f"{code}: {ERRORS[code]} at offset {offset}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
