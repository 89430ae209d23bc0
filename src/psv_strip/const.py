ERRORS = {
  "E_INPUT_MISSING": "Input file does not exist or is not readable",
  "E_LIC_MISSING": "Saved header/license info was not found",
  "E_RECORD_MALFORMED": "Saved header/license info is malformed",
  "E_PATTERN_NOT_FOUND": "License marker pattern not found",
  "E_TRUNCATED": "Input is too short for the PSV layout",
  "E_OUTPUT_IS_INPUT": "Output path would overwrite the input file",
  "E_WRITE_FAILED": "Unable to write output file",
}

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2
EXIT_INPUT_MISSING = 3
EXIT_RESTORE_DATA = 4

EXIT_CODES = {
  "E_INPUT_MISSING": EXIT_INPUT_MISSING,
  "E_LIC_MISSING": EXIT_RESTORE_DATA,
  "E_RECORD_MALFORMED": EXIT_RESTORE_DATA,
  "E_PATTERN_NOT_FOUND": EXIT_FATAL,
  "E_TRUNCATED": EXIT_FATAL,
  "E_OUTPUT_IS_INPUT": EXIT_USAGE,
  "E_WRITE_FAILED": EXIT_FATAL,
}


class PsvError(Exception):
    """Fatal strip/restore failure carrying one of the ERRORS codes."""

    def __init__(self, code: str, detail: str | None = None):
        self.code = code
        self.detail = detail
        msg = ERRORS[code]
        super().__init__(f"{msg}: {detail}" if detail else msg)

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.code]
