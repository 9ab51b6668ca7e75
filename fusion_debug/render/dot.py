import logging
import os
import subprocess
from collections.abc import Iterable

from fusion_debug.graph import DependencyGraph, build_dependency_graph
from fusion_debug.ir import OperationRecord, tensor_label

__all__ = ["render_dot", "save_dot", "NODE_ROLE_COLORS"]

logger = logging.getLogger(__name__)

NODE_ROLE_COLORS: dict[str, str] = {
    "entry": "#FFEAA7",
    "intermediate": "#A8D8EA",
    "sink": "#A8E6CF",
    "isolated": "#E8E8E8",
}

DEFAULT_NODE_COLOR = "#E8E8E8"
DEFAULT_TITLE = "Pre-optimized Operation Graph"


def _escape_dot_string(s: str) -> str:
    """
    Args:
        s: String to escape for DOT format

    Returns:
        Escaped string safe for DOT format
    """
    return s.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _node_role(graph: DependencyGraph, index: int) -> str:
    """Classify a node as entry, sink, intermediate or isolated for coloring."""
    has_inputs = graph.in_degree(index) > 0
    has_outputs = graph.out_degree(index) > 0
    if has_inputs and has_outputs:
        role = "intermediate"
    elif has_outputs:
        role = "entry"
    elif has_inputs:
        role = "sink"
    else:
        role = "isolated"
    return role


def _dot_header(title: str, rankdir: str) -> list[str]:
    """Generate DOT header lines."""
    lines = [
        "digraph OperationGraph {",
        f"    rankdir={rankdir};",
        '    bgcolor="white";',
        "    ",
        '    node [fontname="Arial", fontsize=11, style="filled,rounded", shape=box, color="#333333", penwidth=1.5];',
        '    edge [fontname="Arial", fontsize=9];',
        "    ",
        f'    label="{_escape_dot_string(title)}";',
        '    labelloc="t";',
        "    fontsize=14;",
        "    ",
    ]
    return lines


def graph_to_dot_lines(graph: DependencyGraph, node_prefix: str = "op", indent: str = "    ") -> list[str]:
    """Generate DOT lines for the nodes and per-tensor edges of a dependency graph.

    Args:
        graph: Dependency graph to visualize
        node_prefix: Prefix for node IDs (e.g., "op" -> "op0", "op1")
        indent: Indentation string for DOT lines

    Returns:
        List of DOT format lines, nodes first, then edges, both in index order
    """
    lines = []

    for index, operation in enumerate(graph.operations):
        label = _escape_dot_string(f"Op[{index}]\n{operation.kind_name}")
        color = NODE_ROLE_COLORS.get(_node_role(graph, index), DEFAULT_NODE_COLOR)
        lines.append(f'{indent}{node_prefix}{index} [label="{label}", fillcolor="{color}"];')

    lines.append(f"{indent}")

    for producer, consumer, tensor_id in graph.tensor_edges():
        edge_label = _escape_dot_string(tensor_label(tensor_id))
        lines.append(f'{indent}{node_prefix}{producer} -> {node_prefix}{consumer} [label="{edge_label}"];')

    return lines


def render_dot(operations: Iterable[OperationRecord], title: str = DEFAULT_TITLE, rankdir: str = "TB") -> str:
    """Render an operation sequence as a GraphViz digraph.

    One node per operation, labeled with its index and kind name; one edge
    per (producer, consumer, tensor) dependency, labeled with the tensor.

    Args:
        operations: A StreamSnapshot or any sequence of OperationRecord
        title: Graph title
        rankdir: GraphViz rank direction ("TB" or "LR")

    Returns:
        DOT format string for Graphviz rendering
    """
    assert rankdir in ["TB", "LR"], f"Illegal rankdir {rankdir}"
    graph = build_dependency_graph(operations)
    lines = _dot_header(title, rankdir)
    lines.extend(graph_to_dot_lines(graph))
    lines.append("}")
    return "\n".join(lines) + "\n"


def save_dot(dot_script: str, output_file: str, keep_dot: bool = False) -> str:
    """Save DOT script to file and render as PNG.

    Args:
        dot_script: DOT format string
        output_file: Output filename (without extension, or .png/.dot)
        keep_dot: Whether to keep the intermediate DOT file once the PNG exists

    Returns:
        Path of the PNG, or of the DOT file when Graphviz could not render it
    """
    if output_file.endswith(".png"):
        png_file = output_file
        dot_file = output_file[: -len(".png")] + ".dot"
    elif output_file.endswith(".dot"):
        dot_file = output_file
        png_file = output_file[: -len(".dot")] + ".png"
    else:
        png_file = output_file + ".png"
        dot_file = output_file + ".dot"

    try:
        with open(dot_file, "w") as f:
            f.write(dot_script)
    except OSError as e:
        raise IOError(f"Failed to write DOT file {dot_file}: {e}") from e

    try:
        subprocess.run(["dot", "-Tpng", "-o", png_file, dot_file], capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        logger.warning(f"Error rendering graph with Graphviz: {e.stderr}\nDOT script saved to: {dot_file}")
        return dot_file
    except FileNotFoundError:
        logger.warning(f"Graphviz 'dot' command not found.\nRender manually: dot -Tpng -o {png_file} {dot_file}")
        return dot_file

    logger.info(f"Graph visualization saved to: {png_file}")
    if keep_dot:
        logger.info(f"DOT script saved to: {dot_file}")
    else:
        os.remove(dot_file)
    return png_file
