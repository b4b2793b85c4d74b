"""Fixed constants of the allocation heuristics.

Node reservations, the Rule of 5, overhead/off-heap ratios, partition sizing
and the thresholds behind every warning live here so the rules read the same
numbers the explainer prints.
"""

# --- Node reservation (OS / node manager daemons) ---
RESERVED_CORES = 1
RESERVED_RAM_GB = 1

# --- Executor sizing ---
TARGET_CORES_PER_EXECUTOR = 5
MIN_EFFICIENT_EXECUTOR_CORES = 2
DRIVER_EXECUTOR_SLOTS = 1
PARALLELISM_FACTOR = 2

# --- Memory ---
MIN_OVERHEAD_MB = 384
OVERHEAD_FACTOR_STANDARD = 0.10
OVERHEAD_FACTOR_HEAVY = 0.20
OFFHEAP_FACTOR = 0.15
MIN_HEAP_GB = 1.5
BUDGET_TOLERANCE_GB = 0.1
LARGE_HEAP_GB = 32
MIN_USEFUL_OFFHEAP_GB = 1
REDUCED_MEMORY_FRACTION = 0.45

# --- Partitions ---
TARGET_PARTITION_MB = 200
LARGE_PARTITION_HEAP_GB = 16
ADVISORY_PARTITION_SIZE_LARGE = "256MB"
ADVISORY_PARTITION_SIZE_DEFAULT = "128MB"
