"""Prompt templates for ghostwriting calls.

Builders return plain strings; the service treats them as opaque.
"""

from shared_types import NARRATIVE_MEMORY_TYPES, Language, MemoryType
from store.models import Memory, Product, UserProfile

MAX_CONTEXT_MEMORIES = 30
MAX_CHAT_MEMORIES = 20

VOICE_LABELS = {
    "voice_jargon": "Jargon & catchphrases (use naturally)",
    "voice_audience": "Address the community as",
    "voice_intensity": "Tone intensity / profanity guidance",
    "voice_sacred": "Sacred words & mantras to weave in",
}

NEGATIVE_CONSTRAINTS = """\
STRICT CONSTRAINTS:
1. No dashes or dash bullet points. Use narrative flow, numbered lists or whitespace.
2. No em-dashes. Use a comma, period or parenthesis.
3. Do not number tweets (1/, 2/) unless you know the exact total.
4. Lowercase the word after a colon unless it is a proper noun.
5. Use the memory database: reference concrete details from the memories.
6. No AI fluff ("Unlock", "Unleash", "Elevate", "Game-changer", "Dive in", "Tapestry")."""


def language_line(language: Language | str, verb: str = "Write") -> str:
    if Language(language) == Language.PT:
        return f"IMPORTANT: {verb} the final output in Brazilian Portuguese."
    return f"{verb} in English."


def prioritize_memories(
    memories: list[Memory], focus_types: list[MemoryType] | None = None
) -> list[Memory]:
    """Focus types first, then the rest, capped."""
    if not focus_types:
        return memories
    focus = set(focus_types)
    primary = [m for m in memories if m.type in focus]
    rest = [m for m in memories if m.type not in focus]
    return (primary + rest)[:MAX_CONTEXT_MEMORIES]


def voice_dna(memories: list[Memory]) -> dict[str, str]:
    """Voice settings stored as tagged style references."""
    dna = {}
    for m in memories:
        if m.type != MemoryType.STYLE_REFERENCE:
            continue
        for tag in VOICE_LABELS:
            if tag in m.tags and tag not in dna:
                dna[tag] = m.content
    return dna


def cadence_samples(memories: list[Memory]) -> list[Memory]:
    return [
        m for m in memories if m.type == MemoryType.STYLE_REFERENCE and "voice_dna" not in m.tags
    ]


def format_memory(m: Memory) -> str:
    return (
        f"[ID: {m.id} | TYPE: {m.type}] TITLE: {m.title}\n"
        f"CONTENT: {m.content}\n(Emotion/Tone: {m.emotional_tone or 'Neutral'})"
    )


def format_product(product: Product) -> str:
    lines = ["PRODUCT PROMOTION MODE", f"NAME: {product.name}"]
    if product.persona:
        lines.append(f"TARGET PERSONA: {product.persona}")
    if product.pain_points:
        lines.append(f"PAIN POINTS: {product.pain_points}")
    if product.solution:
        lines.append(f"SOLUTION: {product.solution}")
    if product.link:
        lines.append(f"LINK: {product.link}")
    lines.append(
        "Integrate it as a recommendation that follows from the story, never as an ad."
    )
    return "\n".join(lines)


def content_instruction(
    profile: UserProfile,
    memories: list[Memory],
    platform: str,
    language: Language | str,
    focus_types: list[MemoryType] | None = None,
    product: Product | None = None,
    persona: str | None = None,
    format_rules: str | None = None,
) -> str:
    """System instruction for a personalised content piece."""
    narrative = [m for m in prioritize_memories(memories, focus_types) if m.type in NARRATIVE_MEMORY_TYPES]
    dna = voice_dna(memories)
    samples = cadence_samples(memories)

    sections = [
        f"You are a world-class ghostwriter for {profile.name or 'the user'}.",
        "Create content that feels 100% human, organic and authentic.",
        "USER PROFILE:\n" + profile.summary(),
    ]

    dna_lines = [f"- {VOICE_LABELS[tag]}: {value}" for tag, value in dna.items()]
    if dna_lines:
        sections.append("VOICE & LANGUAGE DNA (mandatory):\n" + "\n".join(dna_lines))

    if profile.voice_analysis:
        sections.append(f"MIMIC THIS VOICE PROFILE: {profile.voice_analysis}")
    else:
        sections.append(f"Tone: {profile.tone or 'conversational'}")

    if samples:
        sections.append(
            "USER WRITING SAMPLES (adopt this cadence and rhythm):\n"
            + "\n---\n".join(f'Sample: "{m.content}"' for m in samples)
        )

    if narrative:
        sections.append(
            "DATABASE (USER STORIES & LESSONS):\n" + "\n\n".join(format_memory(m) for m in narrative)
        )
    if product:
        sections.append(format_product(product))
    if persona:
        sections.append(
            "TARGET AUDIENCE PERSONA (critical). Address their pains, validate their "
            "internal dialogue and overcome their limiting beliefs:\n" + persona
        )

    sections.append(NEGATIVE_CONSTRAINTS)
    sections.append(format_rules or f"Format: {platform} post. Optimize for engagement.")
    sections.append(language_line(language))
    return "\n\n".join(sections)


def content_prompt(
    topic: str,
    source_material: str | None = None,
    style_reference: str | None = None,
    blueprint: str | None = None,
) -> str:
    parts = [f"TOPIC: {topic}"]
    if source_material:
        parts.append(f"SOURCE MATERIAL / CONTEXT: {source_material}")
    parts.append(
        blueprint
        or "Task: Write a high-performing piece about the topic using the user's memories."
    )
    if style_reference:
        parts.append(
            "STYLE REVERSE ENGINEERING: steal the structure of this reference, "
            f'but use my content/topic:\n"{style_reference}"'
        )
    parts.append("IMPORTANT: Return the content wrapped in <draft> and </draft> tags.")
    return "\n\n".join(parts)


def repurpose_material(content: str, source_platform: str, target_platform: str) -> str:
    return (
        f"ORIGINAL CONTENT ({source_platform}):\n{content}\n\n"
        f"TASK: Rewrite this strictly for {target_platform}. Keep the core message "
        "but change the formatting and hook to fit the new platform."
    )


def humanize_instruction(profile: UserProfile, language: Language | str) -> str:
    return "\n".join(
        [
            'You are "The Editor". Rewrite AI-generated text so it reads as human.',
            "1. Kill the cliches.",
            "2. Vary sentence length.",
            "3. Turn dash bullet points into paragraphs or numbered lists.",
            "4. Replace em-dashes with commas or periods.",
            "5. Lower the reading level so it sounds like a conversation.",
            f"User's voice: {profile.voice_analysis or profile.tone}",
            "Return ONLY the rewritten text.",
            language_line(language, "Output"),
        ]
    )


ENRICH_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "type": {
            "type": "string",
            "enum": ["STORY", "BELIEF", "FAILURE", "LESSON", "ANALOGY", "EMOTION", "FACT"],
        },
        "tags": {"type": "array", "items": {"type": "string"}},
        "emotionalTone": {"type": "string"},
    },
}

ENRICH_INSTRUCTION = """\
Analyze the user's memory text. Return JSON with:
- title: a short, punchy summary title (max 6 words)
- type: one of STORY, BELIEF, FAILURE, LESSON, ANALOGY, EMOTION, FACT
- tags: 3-5 keywords
- emotionalTone: one word describing the emotion"""


def topics_prompt(profile: UserProfile, memory_snippet: str, language: Language | str) -> str:
    return (
        f"Based on the user's niche: {profile.niche} and beliefs: "
        f"{', '.join(profile.contrarian_views)}, and these past memories: \"{memory_snippet}\",\n"
        "generate 12 content ideas (hooks/headlines) across: contrarian beliefs, "
        "personal stories, actionable advice, observations.\n"
        'Return JSON: {"topics": ["...", "..."]}\n' + language_line(language, "Output")
    )


def angles_prompt(profile: UserProfile, memory_content: str, language: Language | str) -> str:
    return (
        f'The user has a specific memory: "{memory_content}".\n'
        f"Generate 3 distinct, viral angles or hooks for a content piece for {profile.niche}.\n"
        'Return JSON: {"angles": ["Angle 1", "Angle 2", "Angle 3"]}\n'
        + language_line(language, "Output")
    )


def brain_dump_prompt(text: str, language: Language | str) -> str:
    return (
        "The user has provided a raw brain dump (unstructured thoughts).\n"
        "Extract exactly 3 distinct content angles. Look for: the contrarian take, "
        "the story, the action plan, the vulnerable admission.\n"
        f'RAW TEXT:\n"{text}"\n'
        'Return a JSON array of {"type", "title", "hook", "description"} objects.\n'
        + language_line(language, "Output")
    )


PERSONA_SCHEMA = {
    "type": "object",
    "properties": {
        "snapshot": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "gender": {"type": "string"},
                "summary": {"type": "string"},
            },
        },
        "executiveSummary": {"type": "string"},
        "psychology": {
            "type": "object",
            "properties": {
                "coreConflict": {"type": "string"},
                "thought3AM": {"type": "string"},
                "limitingBeliefs": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "belief": {"type": "string"},
                            "description": {"type": "string"},
                        },
                    },
                },
            },
        },
        "drivers": {
            "type": "object",
            "properties": {
                "fears": {"type": "array", "items": {"type": "string"}},
                "goals": {"type": "array", "items": {"type": "string"}},
                "internalDialogue": {"type": "array", "items": {"type": "string"}},
            },
        },
        "communication": {
            "type": "object",
            "properties": {
                "tone": {"type": "string"},
                "wordsToAvoid": {"type": "array", "items": {"type": "string"}},
                "ctaStyle": {"type": "array", "items": {"type": "string"}},
            },
        },
    },
}


def persona_prompt(form: dict, language: Language | str) -> str:
    fields = ("name", "gender", "challenges", "fears", "goals", "behaviors")
    data = "\n".join(f"- {f.capitalize()}: {form.get(f, '')}" for f in fields)
    return (
        "Create a comprehensive persona psychological debriefing from these raw inputs. "
        "Expose the hidden drivers of this person.\n"
        f"USER PROVIDED DATA:\n{data}\n" + language_line(language, "Output")
    )


def chat_instruction(
    profile: UserProfile, memories: list[Memory], language: Language | str, news_title: str | None = None
) -> str:
    narrative = [m for m in memories if m.type != MemoryType.STYLE_REFERENCE][:MAX_CHAT_MEMORIES]
    lines = [
        f"You are an intelligent assistant for {profile.name or 'the user'}.",
        "You have access to their personal memories and beliefs. Answer from their worldview:",
        f"Values: {', '.join(profile.values)}",
        f"Beliefs: {', '.join(profile.contrarian_views)}",
    ]
    if news_title:
        lines += [
            "MODE: NEWSJACKING STRATEGIST.",
            f'The user wants to write about: "{news_title}". Connect it to their niche '
            f"({profile.niche}) with an authentic, possibly contrarian angle.",
            "Offer 3 angles immediately and keep replies under 50 words unless drafting.",
            "Wrap any finished content piece in <draft>...</draft>.",
        ]
    lines.append(language_line(language, "Respond"))
    lines.append("Memories:\n" + "\n".join(f"[{m.type}] {m.title}: {m.content}" for m in narrative))
    return "\n".join(lines)


CAROUSEL_MODES = {
    "spread": (
        "MODE: SPREAD TEXT\n"
        "Goal: better readability. Spread the exact same ideas across more slides.\n"
        "Do not make it shorter or longer. Just improve spacing and flow.\n"
        "No slide may be overcrowded (max 30-50 words per slide)."
    ),
    "shorter": (
        "MODE: MAKE SHORTER\n"
        "Goal: punchier, more concise.\n"
        "Summarize dense points. Remove fluff. Use stronger verbs.\n"
        "Reduce total word count by about 30%."
    ),
    "longer": (
        "MODE: MAKE LONGER / EXPAND\n"
        "Goal: add depth and value.\n"
        "Add concrete examples, data points or analogies to support the claims.\n"
        'Expand on the "HOW" and "WHY". Add substance, not fluff.'
    ),
}

CAROUSEL_RULES = """\
STRICT CAROUSEL RULES:
1. MAXIMUM 12 SLIDES, even in 'longer' mode.
2. Each slide has 30-60 words (2-5 lines). Airy and editorial.
3. No labels. Do not write "Slide 1". Separate slides with DOUBLE LINE BREAKS.
4. No dashes. Use narrative flow.

NARRATIVE STRUCTURE:
Slide 1: Cover title (one sentence, high tension or curiosity)
Slide 2: Context / "Before" state
Slide 3: Data punch / fact
Slide 4: Root cause / "Why"
Slides 5-9: Proof, examples, core argument
Second to last slide: The reframe / big cultural shift
Last slide: CTA (short and direct)"""


def carousel_refine_prompt(content: str, mode: str, language: Language | str) -> str:
    if mode not in CAROUSEL_MODES:
        raise ValueError(f"Unknown carousel mode: {mode}. Use one of {sorted(CAROUSEL_MODES)}")
    return "\n\n".join(
        [
            "You are an expert Instagram Carousel Editor.",
            f'TASK: Refine the user\'s content based on the selected mode: "{mode}".',
            CAROUSEL_RULES,
            CAROUSEL_MODES[mode],
            f'CURRENT CONTENT:\n"""\n{content}\n"""',
            language_line(language, "Output"),
        ]
    )
