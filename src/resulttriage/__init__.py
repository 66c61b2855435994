"""resulttriage: triage diagnostic results for clinic review.

Flags lab panel values that cross clinic thresholds, tracks aging of pending
lab/X-ray/ultrasound orders against SLA days, and reports turnaround times.
"""

__version__ = "0.3.0"
