"""Notion content assistant.

Each output kind has its own deterministic text generator. Outputs are
markdown meant to be pasted into a Notion page.
"""

import logging
import math
import re
from typing import Any, Callable

from ...prompts.schema import DocumentKind, NotionKind
from ...prompts.fields import FieldState, NotionFields
from .base import Extractor

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200

SENTENCE_SPLIT = re.compile(r"[.!?]+")
WHITESPACE_SPLIT = re.compile(r"\s+")
NUMBERED_LINE = re.compile(r"^\d+\.")
LIST_MARKER = re.compile(r"^\s*[-*]\s*|^\s*\d+\.\s*")

DATE_FUNCTIONS = re.compile(r"date|dateAdd|dateSubtract|formatDate|now|timestamp", re.IGNORECASE)
LOGICAL_OPERATORS = re.compile(r"if|and|or|not|switch|case", re.IGNORECASE)
MATH_FUNCTIONS = re.compile(r"abs|ceil|floor|round|min|max|mod|pow|sqrt", re.IGNORECASE)
STRING_FUNCTIONS = re.compile(r"concat|format|join|length|replace|replaceAll|slice|test", re.IGNORECASE)


def _first_words(text: str, count: int) -> str:
    return " ".join(text.split(" ")[:count])


def _clip(text: str, limit: int) -> str:
    return text[:limit] + "..."


def count_words(text: str) -> int:
    """Whitespace-separated chunks, counting a leading empty chunk."""
    return len(WHITESPACE_SPLIT.split(text))


def split_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT.split(text) if s.strip()]


def reading_minutes(word_count: int) -> int:
    return math.ceil(word_count / WORDS_PER_MINUTE)


def generate_summary(text: str) -> str:
    sentences = split_sentences(text)
    word_count = count_words(text)

    summary = "## Summary of Your Text\n\n"

    if len(sentences) > 3:
        first = sentences[0]
        middle = sentences[len(sentences) // 2]
        last = sentences[-1]
        summary += f"{first.strip()}. {middle.strip()}. {last.strip()}.\n\n"
    else:
        summary += f"{text}\n\n"

    minutes = reading_minutes(word_count)
    plural = "s" if minutes != 1 else ""
    summary += (
        "### Key Statistics\n"
        f"- Word count: {word_count}\n"
        f"- Sentence count: {len(sentences)}\n"
        f"- Estimated reading time: {minutes} minute{plural}\n\n"
    )

    summary += "### Key Points\n"
    keywords = list(dict.fromkeys(w for w in WHITESPACE_SPLIT.split(text) if len(w) > 5))
    for keyword in keywords[:3]:
        summary += f'- Content related to "{keyword}"\n'

    summary += "\n*This summary is ready to paste into your Notion page.*"
    return summary


def generate_table(text: str) -> str:
    """Lay out lines as a markdown table.

    Bulleted or numbered lines become an Item/Notes table, `key: value`
    lines a Property/Value table, and anything else a single column.
    """
    lines = [line for line in text.split("\n") if line.strip()]
    output = "## Generated Table for Notion\n\n"

    has_bullets = any(line.strip().startswith(("-", "*")) for line in lines)
    has_numbering = any(NUMBERED_LINE.match(line.strip()) for line in lines)
    has_colons = any(":" in line for line in lines)

    if has_bullets or has_numbering:
        output += "| Item | Notes |\n| --- | --- |\n"
        for line in lines:
            clean = LIST_MARKER.sub("", line, count=1).strip()
            output += f"| {clean} | |\n"
    elif has_colons:
        output += "| Property | Value |\n| --- | --- |\n"
        for line in lines:
            if ":" in line:
                key, _, value = line.partition(":")
                output += f"| {key.strip()} | {value.strip()} |\n"
            else:
                output += f"| {line} | |\n"
    else:
        output += "| Content |\n| --- |\n"
        for line in lines:
            output += f"| {line.strip()} |\n"

    output += "\n*Copy this markdown table directly into Notion. You can then customize it further.*"
    return output


def generate_formula_help(text: str) -> str:
    help_text = "## Notion Formula Help\n\n"
    help_text += "### Formula Debugging\n"

    if "=" in text:
        help_text += (
            "Your formula appears to use '=' which is not needed in Notion formulas. "
            "Use '==' for equality checks instead.\n\n"
        )

    if DATE_FUNCTIONS.search(text):
        help_text += """#### Date Function Examples
```
// Get current date
formatDate(now(), "MMMM D, YYYY")

// Add days to a date
dateAdd(prop("Due Date"), 7, "days")

// Calculate days between dates
dateBetween(now(), prop("Start Date"), "days")
```

"""

    if LOGICAL_OPERATORS.search(text):
        help_text += """#### Logical Operator Examples
```
// If statement
if(prop("Status") == "Complete", "Done", "Pending")

// Multiple conditions
if(and(prop("Priority") == "High", prop("Status") != "Complete"), "Urgent", "Normal")
```

"""

    if MATH_FUNCTIONS.search(text):
        help_text += """#### Math Function Examples
```
// Round a number
round(prop("Score"))

// Calculate percentage
format(prop("Completed") / prop("Total") * 100) + "%"
```

"""

    if STRING_FUNCTIONS.search(text):
        help_text += """#### String Function Examples
```
// Combine text
concat(prop("First Name"), " ", prop("Last Name"))

// Extract part of text
slice(prop("Full Name"), 0, 1) + "."
```

"""

    help_text += (
        "### Common Formula Mistakes\n"
        "- Missing parentheses or quotes\n"
        "- Using commas instead of periods for decimals\n"
        "- Incorrect property references (case sensitive)\n"
        "- Using JavaScript syntax instead of Notion's formula syntax\n\n"
    )
    help_text += "*Copy this formula reference to your Notion page for future use.*"
    return help_text


def generate_template_ideas(text: str) -> str:
    if len(text) > 50:
        specific = (
            "Based on your specific input, consider creating a custom template for "
            f"{_first_words(text, 3)}..."
        )
    else:
        specific = "Provide more details about your needs for more specific template recommendations."

    return f"""## Notion Template Ideas Based on Your Input

### Project Management
- **Project Dashboard**: Track progress, deadlines, and team assignments
- **Task Tracker**: Organize tasks with priority levels and status updates
- **Meeting Notes**: Template with action items, decisions, and follow-ups

### Personal Productivity
- **Habit Tracker**: Monitor daily habits with consistency charts
- **Goal Setting Framework**: Define goals with milestones and metrics
- **Content Calendar**: Plan and schedule your content creation

### Specific to Your Needs
{specific}

*Ready to implement these in Notion? Copy this text or click the button below to open Notion.*"""


def generate_content_ideas(text: str) -> str:
    return f"""## Content Ideas for Notion

### Blog Post Outline
1. Introduction: Hook your reader with a compelling question or statistic
2. Main Point 1: {_first_words(text, 3)}...
3. Main Point 2: Expand on your concept with practical examples
4. Main Point 3: Address potential challenges or alternatives
5. Conclusion: Summarize key takeaways and call to action

### Social Media Content Calendar
- Monday: Share a tip related to {_first_words(text, 2)}
- Wednesday: Post a question to engage your audience
- Friday: Create a mini-tutorial or how-to guide

### Email Newsletter Structure
- Subject Line: "Transform Your {_first_words(text, 1)} With These Simple Tips"
- Opening: Personal story or relevant news
- Main Content: 3 actionable tips
- Closing: Invitation to reply or connect

*Copy this content to refine in Notion or click below to open Notion directly.*"""


def generate_troubleshooting(text: str) -> str:
    issue = _clip(text, 30) if len(text) > 30 else text
    return f"""## Notion Troubleshooting Guide

### Issue Identified
Based on your description, you're having trouble with: {issue}

### Potential Solutions

1. **Check Permissions**
   - Ensure you have the correct access level for the page
   - Ask workspace admin to check sharing settings

2. **Clear Cache and Refresh**
   - Log out and log back in
   - Try using Notion in a different browser

3. **Formula Syntax**
   - Verify your formula syntax follows Notion's requirements
   - Check for missing parentheses or quotation marks
   - Use the formula documentation for reference

4. **Database Relations**
   - Confirm that related databases exist and are properly linked
   - Check for circular references

### Advanced Troubleshooting
If the above solutions don't work, try:
- Contacting Notion support at team@makenotion.com
- Checking Notion's status page: status.notion.so
- Reviewing recent updates that might affect functionality

*Copy these troubleshooting steps to Notion for reference.*"""


def generate_automation_ideas(text: str) -> str:
    if len(text) > 30:
        specific = f"For your specific needs with '{_clip(text, 30)}', consider:"
    else:
        specific = "Provide more details about your workflow for specific automation recommendations."

    return f"""## Notion Automation Ideas

### Integration Possibilities
1. **Zapier + Notion**
   - Automatically create Notion pages from form submissions
   - Add new calendar events to a Notion database
   - Log completed tasks from other apps to your Notion workspace

2. **Make.com (Integromat) Workflows**
   - Send Notion database updates to your team via Slack
   - Create recurring database entries on a schedule
   - Sync information between Notion and Google Sheets

3. **API Connections**
   - Connect your custom applications to Notion
   - Build dashboards that pull data from Notion
   - Create automated reporting systems

### Based on Your Input
{specific}
- Setting up automated data collection
- Creating notification systems for updates
- Implementing regular backup procedures

*Ready to implement these automations? Save this to Notion for reference.*"""


def generate_collaboration_ideas(text: str) -> str:
    if len(text) > 40:
        specific = f"For your team working on '{_clip(text, 40)}', consider:"
    else:
        specific = "Provide more details about your team for specific collaboration recommendations."

    return f"""## Notion Collaboration Strategies

### Team Workspace Structure
1. **Central Hub Page**
   - Company announcements and updates
   - Quick links to important resources
   - Team directory with roles and contact info

2. **Department Sections**
   - Dedicated spaces for each team
   - Project tracking databases
   - Department-specific resources and templates

3. **Meeting & Documentation System**
   - Standardized meeting note templates
   - Decision log database
   - Action item tracking with assignments

### Communication Protocols
- Use comments for specific feedback on content
- @mentions for directing questions to team members
- Create update request templates for consistency

### Based on Your Team's Needs
{specific}
- Weekly status update templates
- Project milestone tracking
- Resource allocation database

*Copy these collaboration strategies to your Notion workspace.*"""


def generate_learning_resources(text: str) -> str:
    if len(text) > 30:
        specific = f"For learning about '{_clip(text, 30)}', check out:"
    else:
        specific = "Provide more specific topics you want to learn for targeted resources."

    return f"""## Notion Learning Resources

### Official Notion Resources
- **Notion Guides**: https://www.notion.so/help/guides
- **Notion Templates**: https://www.notion.so/templates
- **Notion Webinars**: https://www.notion.so/webinars

### Community Resources
- **Notion Pages**: Community-created templates and guides
- **YouTube Tutorials**: Search for specific Notion features
- **Reddit Community**: r/Notion for questions and inspiration

### Recommended Learning Path
1. Start with basic pages and simple databases
2. Learn about relations and rollups
3. Explore formulas and advanced filters
4. Master templates and workspace organization
5. Implement integrations and automations

### Based on Your Interests
{specific}
- Specialized tutorials on this topic
- Template examples to adapt
- Case studies of similar implementations

*Save these resources to your Notion workspace for future reference.*"""


GENERATORS: dict[NotionKind, Callable[[str], str]] = {
    NotionKind.SUMMARY: generate_summary,
    NotionKind.TEMPLATE: generate_template_ideas,
    NotionKind.CONTENT: generate_content_ideas,
    NotionKind.TROUBLESHOOTING: generate_troubleshooting,
    NotionKind.TABLE: generate_table,
    NotionKind.AUTOMATION: generate_automation_ideas,
    NotionKind.COLLABORATION: generate_collaboration_ideas,
    NotionKind.FORMULA: generate_formula_help,
    NotionKind.LEARNING: generate_learning_resources,
}


class NotionExtractor(Extractor):
    """Runs the generator for the output kind selected in the state."""

    kind = DocumentKind.NOTION

    def extract(self, text: str, state: FieldState) -> dict[str, Any]:
        output_kind = state.kind if isinstance(state, NotionFields) else NotionKind.SUMMARY
        output = GENERATORS[output_kind](text)
        logger.debug(f"[EXTRACT] Notion {output_kind.value}: {len(output)} chars")
        return {"content": text, "output": output}
