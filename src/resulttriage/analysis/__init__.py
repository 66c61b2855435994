"""Batch analyses: aging, turnaround time and dashboard counts."""
