"""CSV loading for quote files (Yahoo downloads, database exports)."""

from pathlib import Path

import pandas as pd

from stockchart.data.ingest import ingest_rows
from stockchart.data.models import SeriesData
from stockchart.exceptions import EmptyDataset
from stockchart.logging import get_logger

logger = get_logger(__name__)

#: Columns read per line. Wider than any accepted row so short and long rows
#: land in one frame; unsupported widths are rejected by ingest_rows.
_READ_WIDTH = 12


def read_rows(path: str | Path) -> list[list[object]]:
    """Read every line of a CSV file as a list of text cells.

    Missing trailing cells come back as empty strings and blank lines are
    dropped. Lines wider than the read width are skipped.

    Raises:
        EmptyDataset: If the file has no content.
    """
    try:
        frame = pd.read_csv(
            path,
            header=None,
            names=range(_READ_WIDTH),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyDataset(f"{path} is empty") from e

    frame = frame.fillna("")
    rows = frame.values.tolist()
    logger.debug("csv_read", path=str(path), lines=len(rows))
    return rows


def read_csv(path: str | Path) -> SeriesData:
    """Read a quote CSV file into a SeriesData.

    Args:
        path: File with ``Date,Volume``, ``Date,Open,High,Low,Close`` or
            ``Date,Open,High,Low,Close,Volume`` rows, header optional.

    Raises:
        FileNotFoundError: If the file does not exist.
        EmptyDataset: If no row contains a valid date.
        NoUsableData: If no row carries a price or volume.
    """
    return ingest_rows(read_rows(path))
