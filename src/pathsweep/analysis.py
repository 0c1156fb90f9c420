#!/usr/bin/env python3
"""
Memory Profile Analysis

Loads profiler dumps back into DataFrames and reduces them to the figures
used to compare storage strategies.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Iterable

import numpy as np
import pandas as pd

from .metrics.memory_profiler import DUMP_HEADER

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = DUMP_HEADER.split('\t')


def load_profile(path: str) -> pd.DataFrame:
    """
    Read a profiler dump.

    Raises:
        ValueError: if the header does not match the dump format
    """
    df = pd.read_csv(path, sep='\t', dtype=np.int64)
    if list(df.columns) != PROFILE_COLUMNS:
        raise ValueError(f"{path}: expected columns {PROFILE_COLUMNS}, got {list(df.columns)}")
    return df.sort_values('id').reset_index(drop=True)


def summarize_profile(df: pd.DataFrame) -> Dict[str, Any]:
    """Peak and final figures of one profile."""
    if df.empty:
        return {
            'samples': 0,
            'peak_allocated': 0,
            'peak_net_allocated': 0,
            'final_allocated': 0,
            'peak_resident': 0,
            'allocated_growth': 0,
        }

    net_allocated = df['allocated'] - df['correction']
    return {
        'samples': int(len(df)),
        'peak_allocated': int(df['allocated'].max()),
        'peak_net_allocated': int(net_allocated.max()),
        'final_allocated': int(df['allocated'].iloc[-1]),
        'peak_resident': int(df['resident'].max()),
        'allocated_growth': int(net_allocated.max() - net_allocated.iloc[0]),
    }


def compare_profiles(paths: Iterable[str]) -> pd.DataFrame:
    """One summary row per dump, indexed by file stem."""
    rows = {}
    for path in paths:
        rows[Path(path).stem] = summarize_profile(load_profile(path))
        logger.debug(f"Summarized profile {path}")
    return pd.DataFrame.from_dict(rows, orient='index')
