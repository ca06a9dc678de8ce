import logging
import os

from csv_parser import ParsedTable, parse


logger = logging.getLogger(__name__)


class FileTypeHandler:
    KNOWN_EXTENSIONS = {".csv", ".txt", ".tsv"}
    ENCODINGS = ("utf-8-sig", "utf-8", "cp1252", "latin-1")

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.KNOWN_EXTENSIONS:
            # the extension is only a hint; any text file is read as CSV
            logger.warning("Reading %s as comma-delimited text", path)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def load(self) -> ParsedTable:
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"No such file: {self.path}")
        if os.path.getsize(self.path) == 0:
            logger.info("No data in %s", self.path)
            return ParsedTable.empty()
        table = parse(self.read_text())
        logger.info(
            "Loaded %s: %d columns, %d rows", self.path, len(table.schema), len(table)
        )
        return table

    def read_text(self) -> str:
        with open(self.path, "rb") as f:
            raw = f.read()
        return self._decode(raw)

    def _decode(self, raw: bytes) -> str:
        for enc in self.ENCODINGS:
            try:
                text = raw.decode(enc)
            except UnicodeDecodeError:
                logger.debug("%s is not %s", self.path, enc)
                continue
            if enc != self.ENCODINGS[0]:
                logger.info("Decoded %s as %s", self.path, enc)
            return text
        # latin-1 maps every byte, so this is only reached with a custom ENCODINGS
        return raw.decode("utf-8", errors="replace")
