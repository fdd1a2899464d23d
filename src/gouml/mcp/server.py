"""MCP server exposing the Go class-diagram generator.

Tools:
- go_to_class_diagram: Mermaid classDiagram text for a Go snippet
- describe_types: extracted types and relationships as JSON
- render_class_diagram: diagram text plus a rendered SVG/PNG (base64)
"""
from __future__ import annotations

import argparse
import asyncio
import base64
import json
from pathlib import Path
from typing import Any, Optional

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent
from pydantic import ValidationError

from ..config import Settings, load_settings
from ..errors import GoUmlError
from ..service import DiagramService

server = Server("gouml-mcp")
runtime_settings: Optional[Settings] = None

TOOL_NAMES = {"go_to_class_diagram", "describe_types", "render_class_diagram"}

CODE_SCHEMA = {
    "type": "string",
    "description": "Go source containing struct/interface declarations and receiver methods.",
}


def _json_text(payload: Any) -> TextContent:
    return TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))


def _get_service() -> DiagramService:
    if runtime_settings is None:
        raise RuntimeError("MCP server has not been initialized with settings.")
    return DiagramService(runtime_settings)


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    return [
        Tool(
            name="go_to_class_diagram",
            description="Convert Go source into a Mermaid classDiagram (structs, interfaces, embedding and inferred interface satisfaction).",
            inputSchema={
                "type": "object",
                "properties": {"code": CODE_SCHEMA},
                "required": ["code"],
            },
        ),
        Tool(
            name="describe_types",
            description="List the structs and interfaces found in Go source with their fields, methods, embeds and relationships.",
            inputSchema={
                "type": "object",
                "properties": {"code": CODE_SCHEMA},
                "required": ["code"],
            },
        ),
        Tool(
            name="render_class_diagram",
            description="Render the class diagram for Go source to an SVG or PNG image (base64 encoded).",
            inputSchema={
                "type": "object",
                "properties": {
                    "code": CODE_SCHEMA,
                    "format": {
                        "type": "string",
                        "enum": ["svg", "png"],
                        "description": "Image format; defaults to the configured format.",
                    },
                },
                "required": ["code"],
            },
        ),
    ]


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any]
) -> list[TextContent]:
    if name not in TOOL_NAMES:
        raise ValueError(f"Unknown tool: {name}")

    service = _get_service()
    code = arguments.get("code")
    if code is None:
        raise ValueError("code is required")

    if name == "go_to_class_diagram":
        try:
            diagram = service.build_diagram(code)
        except GoUmlError as exc:
            return [_json_text({"error": exc.user_message})]
        return [_json_text({"diagram": diagram})]

    if name == "describe_types":
        try:
            parsed = service.parse(code)
        except GoUmlError as exc:
            return [_json_text({"error": exc.user_message})]
        return [_json_text(parsed.to_dict())]

    if name == "render_class_diagram":
        output_format = arguments.get("format")
        if output_format:
            try:
                settings = Settings(
                    **{**runtime_settings.model_dump(), "output_format": output_format}
                )
            except ValidationError as exc:
                return [_json_text({"error": f"Invalid format {output_format!r}: {exc.errors()[0]['msg']}"})]
            service = DiagramService(settings)
        result = await service.generate(code)
        if not result.ok:
            return [_json_text({"error": result.error, "diagram": result.diagram})]
        return [
            _json_text(
                {
                    "diagram": result.diagram,
                    "media_type": result.media_type,
                    "artifact_base64": base64.b64encode(result.artifact).decode("ascii"),
                }
            )
        ]

    raise ValueError(f"Unknown tool: {name}")


async def _main(settings: Settings) -> None:
    global runtime_settings
    runtime_settings = settings
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="gouml-mcp",
                server_version="0.1.0",
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def run_server() -> None:
    parser = argparse.ArgumentParser(description="gouml MCP server")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--renderer-url", help="Mermaid rendering server override")
    args = parser.parse_args()
    settings = load_settings(args.config)
    if args.renderer_url:
        settings.renderer_url = args.renderer_url
    asyncio.run(_main(settings))
