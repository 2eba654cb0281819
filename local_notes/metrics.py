"""Prometheus metrics for the note store.

All metric objects are defined here so they can be imported from any module.
"""

from prometheus_client import Counter, Gauge

# ---------------------------------------------------------------------------
# Note store metrics
# ---------------------------------------------------------------------------

NOTE_MUTATIONS = Counter(
    "local_notes_note_mutations_total",
    "Total number of applied note mutations",
    ["operation"],  # create, update, delete
)

NOTES_STORED = Gauge(
    "local_notes_notes_stored",
    "Number of notes currently held in memory",
)

# ---------------------------------------------------------------------------
# Persistence metrics
# ---------------------------------------------------------------------------

PERSISTENCE_OPERATIONS = Counter(
    "local_notes_persistence_operations_total",
    "Total blob store reads and writes",
    ["operation", "status"],  # load/save, success/failure
)
