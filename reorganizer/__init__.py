"""Reorganize a flat directory of photos into YEAR/MONTH/DAY folders."""
