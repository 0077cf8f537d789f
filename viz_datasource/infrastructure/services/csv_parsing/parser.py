"""CSV parser producing an inferred schema and typed records."""

import io
import logging
from typing import List

import pandas as pd

from viz_datasource.core.abstractions.services import ICsvParser
from viz_datasource.core.constants import UploadErrorMessages
from viz_datasource.core.domain_exceptions import InvalidInputException
from viz_datasource.core.models import DataRecord, InferredSchema, ParsedCsv

from .type_inference import convert_value, infer_column_type

logger = logging.getLogger(__name__)


class CsvDatasourceParser(ICsvParser):
    """Parser for comma separated datasource uploads."""

    def __init__(self, delimiter: str = ","):
        self._delimiter = delimiter

    def parse_bytes(self, content: bytes) -> ParsedCsv:
        """Decode UTF-8 content (with or without BOM) and parse it."""
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidInputException(UploadErrorMessages.NOT_UTF8) from e
        return self.parse(text)

    def parse(self, raw_content: str) -> ParsedCsv:
        """
        Parse CSV text into a schema and records.

        The first row is the header. Cells are read as raw strings and
        converted after the column types are inferred, so pandas never
        guesses types on its own.

        Args:
            raw_content: Full CSV text

        Returns:
            ParsedCsv with the schema in header order and one record per row

        Raises:
            InvalidInputException: For empty, malformed or header-only content
        """
        if not raw_content.strip():
            raise InvalidInputException(UploadErrorMessages.EMPTY_FILE)

        try:
            frame = pd.read_csv(
                io.StringIO(raw_content),
                sep=self._delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError as e:
            raise InvalidInputException(UploadErrorMessages.EMPTY_FILE) from e
        except pd.errors.ParserError as e:
            raise InvalidInputException(f"Malformed CSV content: {e}") from e

        columns = self._read_header(frame.iloc[0].tolist())
        body = frame.iloc[1:]
        if body.empty:
            raise InvalidInputException(UploadErrorMessages.NO_DATA_ROWS)

        cells = [
            [self._cell_text(value) for value in row]
            for row in body.itertuples(index=False, name=None)
        ]

        schema: InferredSchema = {}
        for position, name in enumerate(columns):
            schema[name] = infer_column_type(row[position] for row in cells)

        records = [
            self._build_record(row_number, row, columns, schema)
            for row_number, row in enumerate(cells, start=1)
        ]

        logger.debug(f"Parsed CSV with {len(columns)} columns and {len(records)} rows")
        return ParsedCsv(schema=schema, records=records)

    @staticmethod
    def _cell_text(value) -> str:
        # Short rows are padded with NaN by pandas
        if pd.isna(value):
            return ""
        return str(value)

    def _read_header(self, raw_header: list) -> List[str]:
        columns: List[str] = []
        seen = set()
        for value in raw_header:
            name = self._cell_text(value).strip()
            if not name:
                raise InvalidInputException(UploadErrorMessages.EMPTY_COLUMN_NAME)
            if name in seen:
                raise InvalidInputException(
                    f"Duplicate column name in CSV header: {name}",
                    column=name
                )
            seen.add(name)
            columns.append(name)
        return columns

    @staticmethod
    def _build_record(
        row_number: int,
        row: List[str],
        columns: List[str],
        schema: InferredSchema
    ) -> DataRecord:
        record: DataRecord = {}
        for name, raw in zip(columns, row):
            if not raw.strip():
                continue
            column_type = schema[name]
            try:
                record[name] = convert_value(raw, column_type)
            except ValueError as e:
                raise InvalidInputException(
                    f"Invalid value '{raw}' for {column_type.value} column '{name}' on row {row_number}",
                    row=row_number,
                    column=name
                ) from e
        return record
