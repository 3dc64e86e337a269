from typing import Sequence

from explainer.services.explain.memory import DEFAULT_MEMORY_WINDOW, Exchange
from explainer.services.explain.validator import ExplainRequest, Mode


SYSTEM_PROMPT = (
    "You are a friendly, clear, and trustworthy concise teaching assistant. "
    "Answer in the fewest words possible. Avoid unnecessary adjectives or explanations. "
    "Only include essential information.\n\n"
    "When explaining:\n"
    "- ELI5 -> Use simple, playful language, short sentences, and analogies for a child.\n"
    "- NORMAL -> Beginner-friendly, define terms, give one example.\n"
    "- EXPERT -> Deep technical explanation, include key terms, references, and next steps.\n\n"
    "When giving a roadmap:\n"
    "- Always structure it step-by-step like a flowchart or numbered path.\n"
    "- Each step: short title -> key action -> time estimate -> 1-2 resources (title + URL) "
    "-> one quick exercise/project.\n"
    "- Keep it realistic for a beginner unless told otherwise.\n\n"
    "If something important is missing (e.g., time commitment, goal), ask ONE short "
    "clarifying question before giving the roadmap."
)

MODE_DIRECTIVES: dict[Mode, str] = {
    Mode.ELI5: "Explain simply for a child. Use a short, playful analogy, clear words, and 2-3 short sentences.",
    Mode.NORMAL: "Explain clearly for a beginner. Define terms and give one example.",
    Mode.EXPERT: (
        "Give a detailed, technical explanation with key terms, examples, "
        "and next-step references."
    ),
}

ROADMAP_DIRECTIVE = (
    "Then create a roadmap as a simple flowchart (6-8 steps). For each step:\n"
    "1. Step name\n"
    "2. What to do\n"
    "3. Estimated time\n"
    "4. 1-2 resources (title + URL)\n"
    "5. A small project/exercise\n"
    "Keep it concise and visually clear."
)


def build_output_contract(want_roadmap: bool) -> str:
    lines = [
        "Format your entire output as a single JSON object with these keys:",
        '- "explanation" (required): the main explanation',
        '- "summary" (optional): a short summary of the answer',
    ]
    if want_roadmap:
        lines.append(
            '- "roadmap": an array of roadmap steps, each with '
            "{stepName, action, timeEstimate, resources, exercise}"
        )
    lines.append("Do not include anything outside the JSON object.")
    return "\n".join(lines)


def render_history(history: Sequence[Exchange], limit: int = DEFAULT_MEMORY_WINDOW) -> str:
    blocks: list[str] = []
    for idx, exchange in enumerate(list(history)[-limit:], start=1):
        blocks.append(
            f'Previous question {idx}: "{exchange.message}"\n'
            f'Previous answer {idx}: "{exchange.reply}"'
        )
    return "\n\n".join(blocks)


def build_user_prompt(request: ExplainRequest, history: Sequence[Exchange] = ()) -> str:
    sections = [MODE_DIRECTIVES[request.mode]]
    if request.wantRoadmap:
        sections.append(ROADMAP_DIRECTIVE)
    sections.append(build_output_contract(request.wantRoadmap))
    sections.append(f'User query: "{request.message}"')
    instruction = "\n\n".join(sections)

    context = render_history(history)
    if not context:
        return instruction
    return f"{context}\n\n{instruction}"


def compose_prompts(request: ExplainRequest, history: Sequence[Exchange] = ()) -> tuple[str, str]:
    return SYSTEM_PROMPT, build_user_prompt(request, history)
