#!/usr/bin/env python3
"""
chattags - Incremental parser for component directives in chat replies

Command line front end for inspecting assistant message transcripts that
embed <juice-component .../> directives.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Modes:
    parse      Write the parsed Document as JSON
    export     Write the message with every tag replaced by a placeholder
    replay     Re-parse growing prefixes as a streaming client would and
               write one JSON snapshot per chunk
    highlight  Write the message as standalone highlighted HTML
    preview    Write a plain-text rendering of the Document

Usage:
    chattags inputdir/ outputdir/ --inputFile reply.txt --mode parse

Examples:
    # Parse a finished reply
    chattags . out/ --inputFile reply.txt

    # Watch how a reply renders while it streams, 8 characters at a time
    chattags . out/ --inputFile reply.txt --mode replay --chunkSize 8 -vv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Callable, Dict

from chris_plugin import chris_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter

from .lib import (
    __version__,
    LOG,
    logger_configure,
    state_connectToLogger,
    document_parse,
    placeholders_render,
    document_preview,
)
from .lib.lexer import get_lexer
from .models import ProgramState, pipeline


MODE_SUFFIXES: Dict[str, str] = {
    "parse": ".json",
    "export": ".txt",
    "replay": ".jsonl",
    "highlight": ".html",
    "preview": ".preview.txt",
}

# Define CLI arguments
parser = ArgumentParser(
    description="chattags - parse chat replies with embedded component directives",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Message transcript file (relative to inputdir)"
)

parser.add_argument(
    "--mode",
    default="parse",
    choices=sorted(MODE_SUFFIXES),
    help="What to produce from the transcript",
)

parser.add_argument(
    "--chunkSize",
    default=16,
    type=int,
    help="Characters per simulated stream chunk in replay mode",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the transcript
            - outputFile: Path the selected mode writes to
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing or the chunk size is not positive
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.chunkSize < 1:
        print(f"Error: --chunkSize must be positive, got {state.chunkSize}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.outputFile = state.outputdir / (input_file.stem + MODE_SUFFIXES[state.mode])
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the transcript into memory.

    Returns:
        ProgramState with added field:
            - sourceText: Transcript contents

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading transcript...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def parse_run(state: ProgramState) -> Dict:
    """Write the Document as JSON"""
    document = document_parse(state.sourceText)
    state.outputFile.write_text(json.dumps(document.asDict(), indent=2), encoding="utf-8")
    return {"segments": len(document.segments), "components": len(document.components())}


def export_run(state: ProgramState) -> Dict:
    """Write the placeholder-rendered text"""
    text = placeholders_render(state.sourceText)
    state.outputFile.write_text(text, encoding="utf-8")
    return {"characters": len(text)}


def replay_run(state: ProgramState) -> Dict:
    """
    Parse every chunk-aligned prefix and write one JSON line per snapshot

    Logs whenever the trailing streaming component changes, which is what a
    user would see flicker between states.
    """
    text = state.sourceText
    ends = list(range(state.chunkSize, len(text), state.chunkSize)) + [len(text)]
    previous = None

    with state.outputFile.open("w", encoding="utf-8") as out:
        for end in ends:
            document = document_parse(text[:end])
            streaming = document.streamingComponent()
            current = streaming.type if streaming else None
            if current != previous:
                LOG(f"At {end} chars: streaming component {previous} -> {current}", level=2)
                previous = current
            out.write(json.dumps({"length": end, **document.asDict()}) + "\n")

    return {"snapshots": len(ends)}


def highlight_run(state: ProgramState) -> Dict:
    """Write the transcript as standalone highlighted HTML"""
    formatter = HtmlFormatter(full=True, style='monokai', noclasses=True, title=state.inputSourceFile.name)
    html = highlight(state.sourceText, get_lexer(), formatter)
    state.outputFile.write_text(html, encoding="utf-8")
    return {"characters": len(html)}


def preview_run(state: ProgramState) -> Dict:
    """Write the plain-text rendering of the Document"""
    text = document_preview(document_parse(state.sourceText))
    state.outputFile.write_text(text, encoding="utf-8")
    return {"characters": len(text)}


MODE_RUNNERS: Dict[str, Callable[[ProgramState], Dict]] = {
    "parse": parse_run,
    "export": export_run,
    "replay": replay_run,
    "highlight": highlight_run,
    "preview": preview_run,
}


def mode_run(inputstate: ProgramState) -> ProgramState:
    """
    Run the selected mode over the transcript.

    Returns:
        ProgramState with added field:
            - runResult: Dict with mode, output_file and mode-specific counts

    Exits:
        1 if no transcript was read
    """
    state = inputstate.copy()

    if state.sourceText is None:
        print("Error: No transcript available", file=sys.stderr)
        sys.exit(1)

    LOG(f"Running {state.mode}...", level=1)
    result = MODE_RUNNERS[state.mode](state)
    state.runResult = {"mode": state.mode, "output_file": str(state.outputFile), **result}
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display the results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if runResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.runResult:
        print("Error: Nothing was produced", file=sys.stderr)
        sys.exit(1)

    LOG(f"\n✓ {state.runResult['mode']} complete", level=1)
    LOG(f"  Output: {state.runResult['output_file']}", level=1)
    for key, value in state.runResult.items():
        if key not in ("mode", "output_file"):
            LOG(f"  {key}: {value}", level=2)
    return state


@chris_plugin(
    parser=parser,
    title="chattags - chat component directive parser",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - process one message transcript.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. source_read: Read the transcript
        3. mode_run: Parse / export / replay / highlight / preview
        4. results_report: Display results

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    logger_configure()
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, mode_run, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
