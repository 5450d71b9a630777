"""Partition building on top of equivalence classes.

This module handles:
- Projecting table rows onto an attribute set
- Routing each row ID to the equivalence class of its projected value
- Merging partitions built over disjoint row ranges (shards)
- Summary statistics for logging
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from src.equivalence_class import EquivalenceClass, attribute_label
from src.utils.io_utils import load_settings
from src.utils.logging_utils import get_logger
from src.utils.path_utils import get_config_path

logger = get_logger(__name__)

Partition = Dict[Any, EquivalenceClass]


def _normalize_attributes(attributes: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(attributes, str):
        return [attributes]
    attrs = list(attributes)
    if not attrs:
        raise ValueError("Attribute set must contain at least one attribute")
    return attrs


def _normalize_value(value: Any) -> Any:
    # Missing markers (NaN, None, NaT, pd.NA) collapse to one key
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


def project_rows(
    df: pd.DataFrame, attributes: Union[str, Sequence[str]],
) -> List[Any]:
    """Project every row of ``df`` onto an attribute set.

    Args:
        df: Input table
        attributes: Column name or column names of the attribute set

    Returns:
        One classifier per row, in row order: the cell value for a single
        attribute, a tuple of cell values for several. Missing cells are None.

    """
    attrs = _normalize_attributes(attributes)
    missing_columns = [a for a in attrs if a not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}")

    columns = [[_normalize_value(v) for v in df[a].tolist()] for a in attrs]
    if len(columns) == 1:
        return columns[0]
    return list(zip(*columns))


def _has_missing(classifier: Any) -> bool:
    if isinstance(classifier, tuple):
        return any(v is None for v in classifier)
    return classifier is None


def build_partition(
    df: pd.DataFrame,
    attributes: Union[str, Sequence[str]],
    settings: Optional[Dict[str, Any]] = None,
    row_id_column: Optional[str] = None,
) -> Partition:
    """Build the partition of ``df`` generated by an attribute set.

    Args:
        df: Input table
        attributes: Column name or column names of the attribute set
        settings: Configuration settings (loaded from config/settings.yaml if None)
        row_id_column: Column holding row IDs (defaults to settings, then the index)

    Returns:
        Mapping classifier -> EquivalenceClass in order of first appearance

    Raises:
        ValueError: If columns are missing or row IDs are not unique

    """
    if settings is None:
        settings = load_settings(str(get_config_path()))
    partition_cfg = settings.get("partition", {})
    dropna = bool(partition_cfg.get("dropna", False))
    if row_id_column is None:
        row_id_column = partition_cfg.get("row_id_column")

    attrs = _normalize_attributes(attributes)
    label = attribute_label(attrs)

    if row_id_column is not None:
        if row_id_column not in df.columns:
            raise ValueError(f"Missing row id column: {row_id_column}")
        row_ids = df[row_id_column].tolist()
    else:
        row_ids = df.index.tolist()

    # NaN and None ids compare equal here
    ids = pd.Series(row_ids, dtype=object)
    duplicated = ids.duplicated()
    if duplicated.any():
        dupes = ids[duplicated].unique()[:5]
        raise ValueError(f"Row ids have duplicates, sample: {list(dupes)}")

    classifiers = project_rows(df, attrs)

    logger.info(
        f"partition | attribute={label} | records={len(df)} | dropna={dropna}",
    )

    partition: Partition = {}
    skipped = 0
    for row_id, classifier in zip(row_ids, classifiers):
        if dropna and _has_missing(classifier):
            skipped += 1
            continue
        eq_class = partition.get(classifier)
        if eq_class is None:
            eq_class = EquivalenceClass(classifier, attribute=label)
            partition[classifier] = eq_class
        eq_class.add_row(row_id)

    summary = partition_summary(partition)
    logger.info(
        f"partition | attribute={label} | classes={summary['classes']} | "
        f"rows={summary['rows']} | singletons={summary['singletons']} | "
        f"largest_class={summary['largest_class']} | skipped_missing={skipped}",
    )

    return partition


def merge_partitions(partitions: Iterable[Partition]) -> Partition:
    """Merge partitions built over disjoint row ranges.

    Shards are merged in the order given. The merged representative of a
    class is the representative of the first shard whose class has one set;
    classes filled only through add_rows stay without a representative.
    Input partitions are left untouched.

    Args:
        partitions: Shard partitions of the same attribute set

    Returns:
        Merged partition

    Raises:
        ValueError: If classes under one classifier disagree on the attribute set

    """
    merged: Partition = {}
    shard_count = 0
    for shard in partitions:
        shard_count += 1
        for classifier, eq_class in shard.items():
            target = merged.get(classifier)
            if target is None:
                target = EquivalenceClass(
                    eq_class.get_classifier(), attribute=eq_class.get_attribute(),
                )
                merged[classifier] = target
            elif target.get_attribute() != eq_class.get_attribute():
                raise ValueError(
                    f"Cannot merge classes of different attribute sets: "
                    f"{target.get_attribute()!r} vs {eq_class.get_attribute()!r}",
                )

            rows = eq_class.get_rows()
            representative = eq_class.get_random_row_id()
            if target.get_random_row_id() is None and representative is not None:
                # Re-insert the shard's representative at its own position
                cut = rows.index(representative)
                target.add_rows(rows[:cut])
                target.add_row(representative)
                rows = rows[cut + 1:]
            target.add_rows(rows)

    logger.debug(f"partition | merged_shards={shard_count} | classes={len(merged)}")
    return merged


def get_representatives(partition: Partition) -> Dict[Any, Any]:
    """Map each classifier to the representative row ID of its class."""
    return {
        classifier: eq_class.get_random_row_id()
        for classifier, eq_class in partition.items()
    }


def partition_summary(partition: Partition) -> Dict[str, int]:
    """Summary counts of a partition.

    Returns:
        Dict with ``classes``, ``rows``, ``singletons`` and ``largest_class``

    """
    sizes = [eq_class.get_size() for eq_class in partition.values()]
    return {
        "classes": len(sizes),
        "rows": sum(sizes),
        "singletons": sum(1 for s in sizes if s == 1),
        "largest_class": max(sizes, default=0),
    }
