"""
    Prompt rendering for the hosted-model intent source.
"""
from typing import Sequence

from flow_api.types import NodeRef

_INSTRUCTIONS = """You are an AI assistant that helps users manage a flow diagram.
Convert the user's natural language command into a structured JSON command.

Available commands:
1. add_node - Add a new node with a label
2. delete_node - Delete a node by its number or label
3. update_node - Update a node's label
4. connect_nodes - Connect two nodes together
5. disconnect_nodes - Disconnect two nodes
6. explain - Explain what the flow does
7. unknown - If the command is unclear"""

_FORMAT = """Return ONLY a valid JSON object in this exact format (no markdown, no code blocks, just the JSON):
{
  "type": "add_node" | "delete_node" | "update_node" | "connect_nodes" | "disconnect_nodes" | "explain" | "unknown",
  "nodeId": "string (required for delete_node, update_node - use exact node ID from list above)",
  "nodeLabel": "string (required for add_node, update_node)",
  "sourceNodeId": "string (required for connect_nodes, disconnect_nodes - use exact node ID from list above)",
  "targetNodeId": "string (required for connect_nodes, disconnect_nodes - use exact node ID from list above)",
  "message": "string (required for explain, optional for unknown)"
}

Rules:
- For node numbers: Node 1 = first node (index 0), Node 2 = second node (index 1), etc.
- Return the EXACT node ID from the nodes list above, not a descriptive phrase.
- For add_node: ALWAYS provide a nodeLabel. If the user gives no label, use "Node {next_number}". Never ask the user for a label.
- Match node labels intelligently: "end call node" matches a node labeled "End Call".
- If a node is not found, return type "unknown" with a message listing available nodes.

Examples:
- "Add a node called Hello" -> {"type":"add_node","nodeLabel":"Hello"}
- "Delete node 2" -> {"type":"delete_node","nodeId":"<exact-node-id>"}
- "Connect node 1 to node 3" -> {"type":"connect_nodes","sourceNodeId":"<id-1>","targetNodeId":"<id-3>"}
- "Update node 1 to say Welcome" -> {"type":"update_node","nodeId":"<id-1>","nodeLabel":"Welcome"}
- "What does this flow do?" -> {"type":"explain","message":"<description>"}

IMPORTANT: Return ONLY the JSON object, nothing else."""


def render_node_context(nodes: Sequence[NodeRef]) -> str:
    if not nodes:
        return "The flow is currently empty (no nodes exist yet)."
    lines = [f'  {i + 1}. Node ID: {n.id}, Label: "{n.label}"' for i, n in enumerate(nodes)]
    return "Current nodes in the flow:\n" + "\n".join(lines)


def render_prompt(text: str, nodes: Sequence[NodeRef]) -> str:
    """Full prompt: instructions, node list, user command, output grammar."""
    return "\n\n".join([
        _INSTRUCTIONS,
        render_node_context(nodes),
        f'User command: "{text}"',
        _FORMAT.replace("{next_number}", str(len(nodes) + 1)),
    ])
