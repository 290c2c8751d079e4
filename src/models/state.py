"""
Program state model and pipeline helper

Defines ProgramState dataclass for the command line pipeline and the
pipeline() helper for composing its stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    Each stage adds new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, mode, chunkSize
        - env_check: inputSourceFile, outputFile, envOK
        - source_read: sourceText
        - mode_run: runResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the message transcript
        outputdir: Directory for the generated output
        verbosity: Logging verbosity level (1-3)
        inputFile: Transcript filename (relative to inputdir)
        mode: One of parse, export, replay, highlight, preview
        chunkSize: Characters per simulated chunk in replay mode
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the transcript
        outputFile: Path the selected mode writes to
        sourceText: Transcript contents
        runResult: Mode results (output_file, segments, ...)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    mode: str = field(default="parse")
    chunkSize: int = field(default=16)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    runResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, mode, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for output

        Returns:
            ProgramState instance with all recognized CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Namespace may carry options the state does not track
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(initial_state, env_check, source_read, mode_run)

    This is equivalent to:
        mode_run(source_read(env_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
