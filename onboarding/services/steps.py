from typing import List

# 1-based in every API and table; index 0 here is step 1
STEP_LABELS = (
    "Request received",
    "Manager approval",
    "Accounts created",
    "Software licensed",
    "Equipment ordered",
    "Equipment configured",
    "Equipment shipped",
    "Ready for day one",
)

STEP_COUNT = len(STEP_LABELS)
QUEUED_STEP = 1  # seeded complete when a submission is created

def labels() -> List[str]:
    return list(STEP_LABELS)

def is_valid(step_index: int) -> bool:
    return isinstance(step_index, int) and not isinstance(step_index, bool) and 1 <= step_index <= STEP_COUNT

def label(step_index: int) -> str:
    return STEP_LABELS[step_index - 1]
