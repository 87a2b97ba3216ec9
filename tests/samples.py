# tests/samples.py

SAMPLE_LINES = [
    "(A) Call Mom",
    "x 2025-01-09 2025-01-08 Write tests",
    "Review PR +Work @office",
]
