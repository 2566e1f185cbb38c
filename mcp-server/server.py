#!/usr/bin/env python3
"""MCP Server for Scenario Comparison.

This server exposes baseline vs. alternate trajectory comparisons as MCP
tools, allowing AI assistants to explain what a "what-if" change does to
a user's financial trajectory.
"""

import os
import sys
import json
import asyncio
from typing import Any

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from tools import MultiProgramTools


# Create the MCP server
server = Server("scenario-compare")

# Global tools instance (initialized on startup)
tools: MultiProgramTools | None = None


def get_tools() -> MultiProgramTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Default program can be set via SCENARIO_COMPARE_PROGRAM env var
        default_program = os.environ.get('SCENARIO_COMPARE_PROGRAM')
        base_path = os.path.join(os.path.dirname(__file__), '..')
        tools = MultiProgramTools(base_path, default_program)
    return tools


# Common program parameter schema
PROGRAM_PARAM = {
    "type": "string",
    "description": "The program name (folder in input-parameters). If not specified, uses the default program. Use list_programs to see available programs."
}

YEAR_RANGE_PROPERTIES = {
    "start_year": {
        "type": "integer",
        "description": "Optional: first year of the range. Defaults to the first compared year."
    },
    "end_year": {
        "type": "integer",
        "description": "Optional: last year of the range. Defaults to the last compared year."
    },
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available comparison tools."""
    return [
        Tool(
            name="list_programs",
            description="List all available comparison programs, each a baseline and an alternate trajectory, with their headline insight.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="reload_programs",
            description="Reload all comparison programs from disk. Use this after adding, modifying, or removing trajectory files to refresh the cache without restarting the server.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="get_comparison_summary",
            description="Get whole-horizon differences between the baseline and alternate scenario: retirement date, lifetime interest, net worth at retirement and at end, and total work hours. Use this first to understand the comparison.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_key_insight",
            description="Get the one-sentence headline describing the most significant change between the scenarios.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_year_comparison",
            description="Get baseline values, alternate values and their differences for a specific year.",
            inputSchema={
                "type": "object",
                "properties": {
                    "year": {
                        "type": "integer",
                        "description": "The calendar year to compare"
                    },
                    "program": PROGRAM_PARAM
                },
                "required": ["year"]
            }
        ),
        Tool(
            name="get_year_deltas",
            description="Get year-by-year differences in net worth, income, debt, assets, taxes and savings rate over a range of years.",
            inputSchema={
                "type": "object",
                "properties": {
                    **YEAR_RANGE_PROPERTIES,
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_cumulative_impact",
            description="Get the cumulative impact of the alternate scenario over a range of years: net worth change, total income and tax change, and average yearly benefit.",
            inputSchema={
                "type": "object",
                "properties": {
                    **YEAR_RANGE_PROPERTIES,
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_divergence_points",
            description="Get the year the scenarios differ most in net worth, the year the better scenario switches (crossover), and the year the alternate's cumulative benefit turns positive (break-even), plus each scenario's first debt-free year. With net_worth_target, also the first year each scenario reaches that net worth.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM,
                    "net_worth_target": {
                        "type": "integer",
                        "description": "Optional: net worth milestone in cents (e.g. 100000000 for $1M)"
                    }
                },
                "required": []
            }
        )
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        sc_tools = get_tools()
        program = arguments.get("program")

        if name == "list_programs":
            result = sc_tools.list_programs()
        elif name == "reload_programs":
            result = sc_tools.reload_programs()
        elif name == "get_comparison_summary":
            result = sc_tools.get_comparison_summary(program)
        elif name == "get_key_insight":
            result = sc_tools.get_key_insight(program)
        elif name == "get_year_comparison":
            result = sc_tools.get_year_comparison(arguments["year"], program)
        elif name == "get_year_deltas":
            result = sc_tools.get_year_deltas(
                arguments.get("start_year"),
                arguments.get("end_year"),
                program
            )
        elif name == "get_cumulative_impact":
            result = sc_tools.get_cumulative_impact(
                arguments.get("start_year"),
                arguments.get("end_year"),
                program
            )
        elif name == "get_divergence_points":
            result = sc_tools.get_divergence_points(program, arguments.get("net_worth_target"))
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str)
        )]
    except Exception as e:
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2)
        )]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
