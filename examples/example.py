from sparktune import ClusterConfig
from sparktune import calculate
from sparktune.models.allocation import AllocationResult

# --- Example 1: Default 10 x (16 vCores, 64 GB) cluster ---
try:
    print("--- Sizing a 10 node cluster ---")
    result: AllocationResult = calculate(ClusterConfig())

    print("\n--- Calculation Complete ---")
    print(f"Executors: {result.total_executors} x {result.executor_cores} cores")
    print(f"Executor Heap: {result.executor_memory} GB")
    print(f"Executor Overhead: {result.memory_overhead} GB")
    print(result.generated_config)

except ValueError as e:
    print(f"An error occurred: {e}")

# --- Example 2: PySpark on Iceberg with off-heap, camelCase overrides ---
result = calculate(
    nodes=20,
    coresPerNode=32,
    ramPerNode=256,
    workloadType="heavy",
    storageFormat="iceberg",
    enableOffHeap=True,
)
for warning in result.critical_warnings + result.warnings:
    print(f"! {warning}")
