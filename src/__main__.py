#!/usr/bin/env python3
"""
wikislides - Wiki page to S5 slide show generator

Turns a wiki page into a self-contained S5 presentation. Sections whose
heading carries the heading mark become slides, as do explicit <slides>
blocks; a <slideshow> tag on the page sets the title, author, skin and
other presentation attributes.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Page markup:
    <slideshow style="default" headingmark="★">
    ; subtitle: Quarterly review
    ; subfooter: {{date}}
    </slideshow>

    == ★ Agenda (step) ==
    * Results
    * Plans

    <slides title="Notes" split="----">One
    ----
    Two</slides>

Usage:
    wikislides inputdir/ outputdir/ --inputFile Talk.wiki

    The presentation is written to outputdir/index.html together with the
    skin stylesheet (<style>.css) and the skin and media files it uses.

Examples:
    # Basic generation
    wikislides pages/ output/ --inputFile Talk.wiki

    # Print layout on A4 with another skin
    wikislides pages/ output/ --inputFile Talk.wiki --style blue --print 210x297

    # Also render the article view, verbose output
    wikislides pages/ output/ --inputFile Talk.wiki --articleView -vv
"""

import html
import shutil
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    ArticleView,
    FileEnvironment,
    SlideShow,
    LOG,
    __version__,
    skinStyle_generate,
    skins_listAvailable,
    state_connectToLogger,
)
from .models import (
    GenerationError,
    PrintPageSize,
    ProgramState,
    SlideShowFatalError,
    pipeline,
)


ARTICLE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8" />
<title>{title}</title>
{head}
</head>
<body>
{body}
</body>
</html>
"""

# Define CLI arguments
parser = ArgumentParser(
    description="wikislides - Wiki page to S5 slide show generator",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Wiki page source file (relative to inputdir)"
)

parser.add_argument(
    "--pageTitle",
    default=None,
    type=str,
    help="Page title. Defaults to the input file name without extension",
)

parser.add_argument(
    "--style",
    default=None,
    type=str,
    help="Skin overriding the style attribute of the page",
)

parser.add_argument(
    "--print",
    dest="printSize",
    default=None,
    type=str,
    help="Generate the print layout for this page size in millimetres (e.g. 210x297)",
)

parser.add_argument(
    "--articleView",
    action="store_true",
    help="Also render the ordinary article view to article.html",
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
    Validate environment and resolve all file paths.

    Verifies that the input file, the skin and the print page size are
    usable, then creates the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the page source
            - htmlOutputdir: Created output directory path
            - environment: FileEnvironment over inputdir
            - envOK: True if environment is valid

    Exits:
        1 if the input file or skin is missing or the page size is malformed
    """

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if not state.pageTitle:
        state.pageTitle = str(Path(state.inputFile).with_suffix(""))
    LOG(f"Page title: {state.pageTitle}", level=2)

    # Stylesheet is written next to the presentation as <style>.css
    settings = appsettings.model_copy(update={"style_url": "{skin}.css"})

    available = skins_listAvailable(settings.skins_dir)
    if state.style and state.style not in available:
        print(f"Error: Skin '{state.style}' not found. Available: {', '.join(available)}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.printSize:
        try:
            PrintPageSize.parse(state.printSize)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)

    state.environment = FileEnvironment(state.inputdir, settings)

    state.htmlOutputdir = state.outputdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the wiki page source.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added field:
            - pageText: Raw page text

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.pageText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.pageText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def slides_load(inputstate: ProgramState) -> ProgramState:
    """
    Segment the page into slides and render them.

    Args:
        inputstate: Program state with pageText and environment

    Returns:
        ProgramState with added field:
            - slideShow: SlideShow holding attributes, slide records and css

    Exits:
        1 if the page tree is malformed, or the page metadata or skin
        configuration cannot be read
    """

    state = inputstate.copy()

    LOG("Extracting slides...", level=1)

    overrides = {"style": state.style} if state.style else None

    try:
        slideshow = SlideShow(
            state.pageTitle,
            state.environment,
            content=state.pageText,
            settings=state.environment.settings,
            overrides=overrides,
        )
        slideshow.slides_load()
    except GenerationError as e:
        print(f"Generation error: {e}", file=sys.stderr)
        sys.exit(1)
    except SlideShowFatalError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    LOG(f"Loaded {len(slideshow.slides)} slides, skin '{slideshow.attributes.style}'", level=2)
    state.slideShow = slideshow
    return state


def presentation_generate(inputstate: ProgramState) -> ProgramState:
    """
    Assemble the presentation and write it with its stylesheet.

    Nothing is written unless both the presentation and the stylesheet
    were generated.

    Args:
        inputstate: Program state with slideShow loaded

    Returns:
        ProgramState with added field:
            - generateResult: Dict containing:
                - output_file: str (path to index.html)
                - style_file: str (path to the skin stylesheet)
                - article_file: Optional[str] (path to article.html)
                - slide_count: int (number of slides)

    Exits:
        1 if the template or skin cannot be loaded
    """

    state = inputstate.copy()
    slideshow = state.slideShow
    environment = state.environment
    settings = environment.settings

    LOG("Generating presentation...", level=1)

    print_size = PrintPageSize.parse(state.printSize) if state.printSize else None
    style = slideshow.attributes.style

    try:
        document = slideshow.slideFile_generate(print_size)
        stylesheet = skinStyle_generate(style, environment, settings, print_mode=print_size is not None)
        article = None
        if state.articleView:
            view = ArticleView(state.pageTitle, environment, settings=settings)
            body = view.page_render(state.pageText)
            article = ARTICLE_TEMPLATE.format(
                title=html.escape(state.pageTitle),
                head=view.head_html(),
                body=body,
            )
    except GenerationError as e:
        print(f"Generation error: {e}", file=sys.stderr)
        sys.exit(1)

    output_file = state.htmlOutputdir / "index.html"
    output_file.write_text(document, encoding="utf-8")

    style_file = state.htmlOutputdir / f"{style}.css"
    style_file.write_text(stylesheet, encoding="utf-8")

    article_file = None
    if article is not None:
        article_file = state.htmlOutputdir / "article.html"
        article_file.write_text(article, encoding="utf-8")

    shutil.copytree(settings.skins_dir, state.htmlOutputdir / settings.skin_base_url, dirs_exist_ok=True)
    if environment.media_dir.is_dir():
        shutil.copytree(environment.media_dir, state.htmlOutputdir / "media", dirs_exist_ok=True)

    state.generateResult = {
        "output_file": str(output_file),
        "style_file": str(style_file),
        "article_file": str(article_file) if article_file else None,
        "slide_count": len(slideshow.slides),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display generation results and usage instructions to user.

    Args:
        inputstate: Program state with generateResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if generateResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.generateResult:
        print("Error: Generation failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Presentation generated!", level=1)
    LOG(f"  Output: {state.generateResult['output_file']}", level=1)
    LOG(f"  Stylesheet: {state.generateResult['style_file']}", level=1)
    if state.generateResult["article_file"]:
        LOG(f"  Article: {state.generateResult['article_file']}", level=1)
    LOG(f"  Slides: {state.generateResult['slide_count']}", level=1)
    LOG("\nTo view:", level=1)
    LOG(f"  open {state.generateResult['output_file']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="wikislides - Wiki page to S5 slide show generator",
    category="Visualization",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - generate an S5 presentation from a wiki page.

    Orchestrates the generation pipeline:
        1. env_check: Validate paths, skin and page size
        2. source_read: Read the page source
        3. slides_load: Segment and render the slides
        4. presentation_generate: Assemble and write the presentation
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - inputFile: str - Page source filename
            - pageTitle: Optional[str] - Page title
            - style: Optional[str] - Skin override
            - printSize: Optional[str] - Print page size "WxH" in mm
            - articleView: bool - Also write article.html
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing the page, its metadata and media/
        outputdir: Directory where the presentation will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, slides_load, presentation_generate, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
