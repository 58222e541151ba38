"""Example usage of the molang library."""

import logging

from molang import MolangInstance, runtime_query
from molang.allocation import AllocationTracker

logging.basicConfig(level=logging.INFO)

# Each host object gets its own instance; expressions compiled by it share
# its actor variables.
tracker = AllocationTracker(budget=64 * 1024)
instance = MolangInstance(allocation_tracker=tracker)

# Context variables are positional arguments, named at compile time.
bounce = instance.compile(
    "t.height = math.abs(math.sin(c.time * 180)) * c.scale; v.peak = math.max(v.peak, t.height); t.height",
    ["time", "scale"],
)

print("Evaluating bounce...")
for step in range(5):
    time = step * 0.25
    print(f"  t={time:.2f} height={bounce.evaluate(time, 2.0)[0]:.3f}")
print(f"  peak so far: {instance.get_value('peak')}")

# Vectors
offset = instance.compile("v.pos = [1, 2, 3]; return v.pos", [], {})
print(f"\nVector expression returned {offset.return_count} values: {offset.evaluate()}")

# Queries can call back into the host, including other compiled expressions.
spin = MolangInstance(queries={"q.bounce": runtime_query(lambda: bounce.evaluate(0.5, 1.0)[0], 0)})
print(f"\nNested evaluation: {spin.compile('q.bounce() + 1').evaluate()}")

print(f"\n{tracker.used} of {tracker.budget} bytes charged")
