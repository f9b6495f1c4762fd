"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the presentation pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as generation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, pageTitle,
                   style, printSize, articleView
        - env_check: inputSourceFile, htmlOutputdir, environment, envOK
        - source_read: pageText
        - slides_load: slideShow
        - presentation_generate: generateResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory holding the wiki pages (and media/, templates)
        outputdir: Base output directory for generated files
        verbosity: Logging verbosity level (1-3)
        inputFile: Page source filename (relative to inputdir)
        pageTitle: Page title; defaults to the input file stem
        style: Skin name overriding the page's own style attribute
        printSize: Print page size "WxH" in millimetres, None for slideshow
        articleView: Also render the ordinary article view of the page
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the page source
        htmlOutputdir: Output directory
        environment: FileEnvironment serving pages, media and labels
        pageText: Raw page text
        slideShow: Loaded SlideShow (attributes, slide records, css)
        generateResult: Paths and counts of generated files
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    pageTitle: Optional[str] = field(default=None)
    style: Optional[str] = field(default=None)
    printSize: Optional[str] = field(default=None)
    articleView: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    environment: Optional[Any] = field(default=None)  # FileEnvironment at runtime
    pageText: Optional[str] = field(default=None)
    slideShow: Optional[Any] = field(default=None)  # SlideShow at runtime
    generateResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, style, etc.)
            inputdir: Directory containing page sources
            outputdir: Directory for generated output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep CLI options that are ProgramState fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

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

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            slides_load,
            presentation_generate,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
