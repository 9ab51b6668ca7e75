import logging
import os

import numpy as np

from fusion_debug import DeferredRuntime, FusionDebugger, current_stream_id
from fusion_debug.ir import Float, Init, NumericFloat, output, record, tensor
from fusion_debug.render import save_dot
from fusion_debug.utils import setup_logging

output_dir = os.environ.get("FUSION_DEBUG_OUTPUT", "/tmp/fusion_debug")
os.makedirs(output_dir, exist_ok=True)
setup_logging(f"{output_dir}/debug.log")
logger = logging.getLogger("fusion_debug.examples.graph_debug")

SHAPE = (2, 2)


def enqueue_mul_add_tanh(runtime: DeferredRuntime) -> None:
    """Record ``tanh(x * 2.0 + 1.0)`` on the current stream without running it."""
    runtime.register(record(Init("FromData", dtype=np.float32), outputs=(output(0, SHAPE),)))
    runtime.register(
        record(
            NumericFloat("MulScalar", dtype=np.float32, params={"rhs": 2.0}),
            inputs=(tensor(0, SHAPE),),
            outputs=(output(1, SHAPE),),
        )
    )
    runtime.register(
        record(
            NumericFloat("AddScalar", dtype=np.float32, params={"rhs": 1.0}),
            inputs=(tensor(1, SHAPE),),
            outputs=(output(2, SHAPE),),
        )
    )
    runtime.register(
        record(Float("Tanh", dtype=np.float32), inputs=(tensor(2, SHAPE),), outputs=(output(3, SHAPE),))
    )


def main() -> None:
    runtime = DeferredRuntime()
    debugger = FusionDebugger(runtime)
    stream_id = current_stream_id()

    enqueue_mul_add_tanh(runtime)

    pre_ops = debugger.pre_optimized(stream_id)
    if pre_ops is None:
        print("No operations found in current stream (operations may have been executed already)")
        return

    ascii_graph = debugger.ascii_graph(pre_ops)
    dot_graph = debugger.dot_graph(pre_ops)
    logger.debug(ascii_graph)
    print(ascii_graph)
    print(dot_graph)
    print(debugger.optimization_summary(stream_id))
    print(f"Fusion summary before execution: {debugger.fusion_summary()}")
    save_dot(dot_graph, os.path.join(output_dir, "pre_optimized.dot"), keep_dot=True)

    runtime.drain(stream_id)

    print(debugger.post_optimized_ascii_graph())
    print(f"Fusion summary after execution: {debugger.fusion_summary()}")
    for plan in debugger.execution_plan_summaries_with_ops():
        print(f"Execution Plan {plan.id}: {plan.operation_count} operations, {plan.trigger_count} triggers")
        print(f"  Operation types: {list(plan.operation_types)}")

    if debugger.pre_optimized(stream_id) is None:
        print("Pre-optimized queue is empty (operations were consumed and optimized)")


if __name__ == "__main__":
    main()
