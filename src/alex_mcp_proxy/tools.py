"""
Tool definitions exposed to the assistant.

The descriptions are what the assistant reads to pick a tool, so they spell
out when each tool applies.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from mcp.types import Tool


@dataclass(frozen=True)
class ToolSpec:
    """A proxied tool: one free-text "request" argument, one backend flag."""

    name: str
    description: str
    request_description: str
    is_comparison: bool = False

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "request": {
                    "type": "string",
                    "description": self.request_description,
                }
            },
            "required": ["request"],
        }

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


AL_QUERY_DESCRIPTION = """DEFAULT TOOL - Use for ALL Business Central AL questions (except version comparisons).

Query Alex RAG (Retrieval-Augmented Generation) for expert answers on Microsoft Dynamics 365 Business Central AL code. This tool searches through vectorized AL code documentation and provides contextual answers with code examples.

## When to Use This Tool

- When you need information about AL syntax, objects, or patterns
- When troubleshooting AL code issues or errors
- When looking for best practices in Business Central development
- When you need code examples for specific AL functionality
- When asking about table structures, pages, codeunits, or any AL object
- For general AL development questions (without version comparison)

## When NOT to Use This Tool

- For comparing different BC versions (use alex_al_comparison instead)
- For non-AL questions (use appropriate tools or standard Copilot)
- For questions about Azure, .NET, or other technologies (use microsoft_docs tools)

## Usage Pattern

Ask clear, specific questions about Business Central AL development. The tool works best when you:
1. Specify the AL object type (table, page, codeunit, etc.) when relevant
2. Include context about what you're trying to achieve
3. Mention specific AL features or functions you're interested in

## Examples

- "How do I create a table extension in AL?"
- "What's the syntax for posting a sales order in AL?"
- "Show me examples of using RecordRef in Business Central"
- "How to implement OnValidate trigger in AL?"

## Output Format

Markdown-formatted text with explanations of AL concepts, code examples, references to relevant AL objects and recommended practices."""


AL_COMPARISON_DESCRIPTION = """USE ONLY for comparing BC versions (26 vs 27, etc.). For ALL other AL questions, use alex_al_query.

Compare different versions of Business Central AL code. This specialized tool analyzes code differences between BC versions to identify breaking changes, new features, and deprecated functionality.

## When to Use This Tool

- When comparing AL code between two BC versions (e.g., BC 26 vs BC 27)
- When investigating breaking changes during BC version upgrades
- When looking for new features introduced in a specific BC version
- When tracking deprecated or obsolete AL objects across versions
- When analyzing API changes between BC releases

## When NOT to Use This Tool

- For general AL questions without version comparison (use alex_al_query instead)
- For single-version AL documentation lookup
- For questions about upgrade procedures or migration steps

## Usage Pattern

ALWAYS explicitly mention the versions you want to compare.

## Version Format

Supported BC versions: 23 through 27 and later. You can specify:
- Major version only: "BC 26" (uses latest available minor version)
- Full version: "BC 26.5" or "BC 26.5.0.0"

## Examples

- "What changed in the Sales Header table between BC 26 and BC 27?"
- "Compare the Item table between version 25 and 26"
- "Show me breaking changes in Codeunit 80 from BC 24 to BC 25"
- "List deprecated functions in BC 27 compared to BC 26"

## Output Format

Markdown-formatted comparison reports listing added, modified and removed elements, with breaking change indicators."""


AL_QUERY = ToolSpec(
    name="alex_al_query",
    description=AL_QUERY_DESCRIPTION,
    request_description=(
        "Your question about Business Central AL code. "
        "Be specific and provide context when possible."
    ),
    is_comparison=False,
)

AL_COMPARISON = ToolSpec(
    name="alex_al_comparison",
    description=AL_COMPARISON_DESCRIPTION,
    request_description=(
        "Your comparison question. "
        "Must explicitly mention versions or indicate comparison intent."
    ),
    is_comparison=True,
)

TOOLS: Tuple[ToolSpec, ...] = (AL_QUERY, AL_COMPARISON)


def get_tool(name: str) -> Optional[ToolSpec]:
    for spec in TOOLS:
        if spec.name == name:
            return spec
    return None
