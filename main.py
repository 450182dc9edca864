#!/usr/bin/env python3
"""
archscope - command line entry point

Analyzes a project directory and writes the result as JSON files that a
dashboard can load statically.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from archscope.analyzer import CodebaseAnalyzer, InvalidProjectPathError
from archscope.config import settings
from archscope.utils.logger import app_logger, setup_logging


def write_json(path: Path, data) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_results(result, output_dir: Path) -> None:
    """Write each non-empty sub-result and the combined result."""
    output_dir.mkdir(parents=True, exist_ok=True)

    parts = {
        "routes.json": result.routes,
        "components.json": result.components,
        "schema.json": result.schema,
        "dependencies.json": result.dependency_graph,
    }
    for file_name, part in parts.items():
        if part is not None:
            write_json(output_dir / file_name, part.to_dict())

    write_json(output_dir / "analysis.json", result.to_dict())


def print_summary(result) -> None:
    graph = result.dependency_graph
    print(f"API Routes: {len(result.routes.routes) if result.routes else 0}")
    print(f"Components: {len(result.components.components) if result.components else 0}")
    print(f"Entities:   {len(result.schema.entities) if result.schema else 0}")
    print(f"Files:      {len(graph.nodes) if graph else 0}")
    print(f"Imports:    {len(graph.edges) if graph else 0}")


def main(argv=None):
    """Main entry point for the analyzer CLI."""
    parser = argparse.ArgumentParser(description="archscope - analyze a project's architecture")
    parser.add_argument("project_path", help="Path to the project directory")
    parser.add_argument("--output-dir", default=settings.output_dir, help="Directory for JSON output")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")

    args = parser.parse_args(argv)

    if args.log_level != settings.log_level:
        setup_logging(args.log_level, settings.log_file or None)

    try:
        analyzer = CodebaseAnalyzer(args.project_path)
    except InvalidProjectPathError as e:
        app_logger.error(f"Error: {e}")
        return 1

    print(f"\nAnalyzing codebase: {analyzer.project_path}\n")

    try:
        result = asyncio.run(analyzer.analyze())
        print_summary(result)

        output_dir = Path(args.output_dir)
        write_results(result, output_dir)
    except KeyboardInterrupt:
        app_logger.info("Interrupted")
        return 130
    except Exception as e:
        app_logger.error(f"Analysis failed: {e}")
        return 1

    print(f"\nAnalysis complete! Output written to {output_dir.resolve()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
