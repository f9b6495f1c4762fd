"""
Custom Pygments lexer for wiki slide markup

Provides syntax highlighting for presentation sources shown inside
presentations (<syntaxhighlight lang="s5">).

Token types:
- Generic.Heading: Section headings (== Title ==), i.e. slide boundaries
- Keyword.Declaration: Slide tags (<slideshow>, <slides>, <slidecss>)
- Name.Builtin: Any other tag
- Name.Attribute / Literal.String: tag attributes and "; key: value" lines
- Comment: HTML comments
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Literal,
    Comment,
    Generic,
)


class WikiSlidesLexer(RegexLexer):
    """
    Lexer for wiki pages holding slide shows

    Example:
        <slideshow style="default" />
        == ★ Intro (step) ==
        * first point

    Tokens:
        <slideshow → Keyword.Declaration
        style → Name.Attribute
        "default" → Literal.String
        == ★ Intro (step) == → Generic.Heading
    """

    name = 'WikiSlides'
    aliases = ['wikislides', 's5']
    filenames = ['*.wiki']

    tokens = {
        'root': [
            # HTML comments
            (r'<!--.*?-->', Comment),

            # Headings: whole line, slide boundaries when marked
            (r'^(=+)([^\n]+?)(=+)([ \t]*)$',
             bygroups(Punctuation, Generic.Heading, Punctuation, Text)),

            # Slide tags (opening and closing)
            (r'(</?)(slideshow|slides|slidecss|slide)\b',
             bygroups(Punctuation, Keyword.Declaration), 'tag'),

            # Any other tag
            (r'(</?)([a-zA-Z][\w-]*)', bygroups(Punctuation, Name.Builtin), 'tag'),

            # "; key: value" attribute lines inside <slideshow>
            (r'^(\s*;\s*)([^:\s]*)(\s*:)([^\n]*)',
             bygroups(Punctuation, Name.Attribute, Punctuation, Literal.String)),

            # List bullets
            (r'^[*#]+', Punctuation),

            # Everything else is text
            (r'[^<=;*#\n]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],

        'tag': [
            (r'\s+', Text),
            (r'([\w-]+)(\s*=\s*)("[^"]*"|\'[^\']*\'|[^\s>]+)',
             bygroups(Name.Attribute, Punctuation, Literal.String)),
            (r'[\w-]+', Name.Attribute),
            (r'/?>', Punctuation, '#pop'),
            (r'.', String),
        ],
    }
