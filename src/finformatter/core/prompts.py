"""Instruction preamble and prompt composition for paper analysis."""

from finformatter.core.enums import InputMode, SegmentType
from finformatter.core.paper import Journal

_SEGMENT_TYPES = ", ".join(t.value for t in SegmentType)

SYSTEM_INSTRUCTION = f"""You are a senior typesetting editor for finance and economics journals. \
Restructure the user's paper text into a high-standard structured JSON document.

### Procedure
1. Semantic classification:
   - Classify every paragraph as one of: [{_SEGMENT_TYPES}].
   - Detect funding statements and acknowledgements and emit them as type "footnote" \
marked as a starred first-page note.

2. Three-line tables:
   - Parse every table written as text into a 2-D array in "data".
   - Identify the table caption and the data source and put them in "caption" and "source".
   - Never include the caption inside "data".

3. Mathematics:
   - Wrap variables in body text with <i> tags (e.g. <i>R2</i>, <i>β</i>).
   - Emit equation paragraphs as "body" segments.

4. Audit alerts ("audit_alerts"):
   - Always report a title or abstract that exceeds the journal limit.
   - Always report missing JEL classification codes.
   - Always report conflicts between citation styles (author-year vs numeric).

5. Placeholders:
   - Keep every [[IMAGE_X]] placeholder in place as its own segment.

### Output constraints
1. Return pure JSON only. No Markdown code fences, explanations or preamble.
2. Follow this shape exactly: {{"metadata": {{"title", "authors", "abstract", "keywords", \
"jelCodes"}}, "statusReport": {{"titleCount", "abstractCount", "majorChanges", "isCompliant", \
"complianceSummary"}}, "segments": [{{"type", "content", "caption", "source", "data"}}], \
"audit_alerts": [], "titleSuggestions": []}}. If there is no content, return \
{{"segments": [], "audit_alerts": []}}.
3. Variables in body text must be wrapped in <i>.
4. Close every JSON structure; do not stop midway.
"""

SNIPPET_NOTE = (
    "Input Mode: snippet. The content is an excerpt of a longer paper; "
    "do not raise audit alerts for missing title, abstract, keywords or JEL codes."
)


def build_prompt(journal: Journal, text: str, mode: InputMode = InputMode.FULL) -> str:
    """Compose the user prompt for one analysis.

    Built once per analysis and sent unchanged to every provider tried.

    Args:
        journal: Target journal.
        text: Paper text.
        mode: Whether the text is the full paper or an excerpt.

    Returns:
        Prompt string.
    """
    lines = [
        f"Target Journal: {journal.name}",
        f"Rules: {journal.rules.to_prompt_json()}",
    ]
    if InputMode(mode) == InputMode.SNIPPET:
        lines.append(SNIPPET_NOTE)
    lines.append(f"Content: {text}")
    return "\n".join(lines)
