"""
Shared constants used across multiple modules.
Single source of truth for checklist items and insight thresholds.
"""

# Checklist items in display order: (key, record attribute, chart label, sentence name)
CHECKLIST_ITEMS = (
    ("shower",    "took_shower",   "Banho",    "tomar banho"),
    ("dressed",   "got_dressed",   "Vestir",   "se vestir"),
    ("breakfast", "had_breakfast", "Café",     "tomar café"),
    ("meds",      "took_meds",     "Remédios", "tomar remédios"),
)

# Anxiety score domain
ANXIETY_MIN = 0
ANXIETY_MAX = 10

# Anxiety x duration correlation
CORRELATION_MIN_ROUTINES = 3
HIGH_ANXIETY_CUTOFF = 6          # score > cutoff is "high"
CORRELATION_MIN_GAP_SEC = 60

# Completion rate feedback (percent)
COMPLETION_EXCELLENT_PCT = 80
COMPLETION_LOW_PCT = 50

# Medication impact
MEDS_MIN_ROUTINES = 5
MEDS_MIN_SAMPLES = 3
MEDS_MIN_GAP = 1

# Streak celebration
STREAK_CELEBRATION_DAYS = 7

# High-anxiety pattern
HIGH_ANXIETY_SCORE = 7           # score >= this counts as a high-anxiety day
HIGH_ANXIETY_MIN_DAYS = 3

# Neglected checklist item (percent)
NEGLECTED_ITEM_PCT = 70
