"""Guided-creation catalog: intentions, formats, focus areas and frameworks.

A framework pairs an intention with a focus area and carries the blueprint
the model must follow. A format carries the structure rules for one kind
of post.
"""

from dataclasses import dataclass

from shared_types import MemoryType


@dataclass(frozen=True)
class Intention:
    id: str
    label: str
    description: str


@dataclass(frozen=True)
class ContentFormat:
    id: str
    label: str
    description: str
    structure: str


@dataclass(frozen=True)
class FocusArea:
    id: str
    label: str
    description: str
    memory_types: tuple[MemoryType, ...] = ()


@dataclass(frozen=True)
class Framework:
    id: str
    title: str
    description: str
    intention_id: str
    focus_id: str
    format_ids: tuple[str, ...] = ()
    blueprint: str = ""


INTENTIONS = [
    Intention("educate", "Educate", "Teach specific skills or share knowledge."),
    Intention("motivate", "Motivate", "Inspire action or mindset shifts."),
    Intention("connect", "Connect", "Build emotional rapport and trust."),
    Intention("polarize", "Polarize", "Challenge status quo or state opinions."),
    Intention("promote", "Promote", "Soft sell a product or service."),
    Intention("analyze", "Analyze", "Break down trends or news."),
]

FORMATS = [
    ContentFormat(
        "x_short",
        "X Short Post",
        "Under 280 chars. Punchy.",
        "PLATFORM: X (Twitter). LENGTH: STRICTLY under 280 characters. "
        "STRUCTURE: One powerful hook, one supporting sentence, one punchy conclusion. "
        "FORMATTING: Short, punchy sentences. Double line breaks between thoughts. "
        "NO DASHES or bullet points. NO EM-DASHES. Lowercase after colons unless a proper noun.",
    ),
    ContentFormat(
        "x_thread",
        "X Long Post (Thread)",
        "Deep dive thread format.",
        "PLATFORM: X (Twitter) Thread. STRUCTURE: Tweet 1 (Viral Hook), Tweet 2-N "
        "(Value/Story points), Final Tweet (Call to Action). FORMATTING: One or two short "
        "sentences per tweet. Double spacing between ideas. NO DASHES. NO EM-DASHES. "
        'Lowercase after colons. Do not number tweets (e.g. "1/") unless you know the '
        'exact total (e.g. "1/5").',
    ),
    ContentFormat(
        "li_short",
        "LinkedIn Short",
        "Professional, single idea.",
        "PLATFORM: LinkedIn. LENGTH: Short (100-150 words). STRUCTURE: Professional hook, "
        "clear insight, question for engagement. FORMATTING: Generous whitespace. "
        "Short paragraphs. NO DASHES. NO EM-DASHES.",
    ),
    ContentFormat(
        "li_long",
        "LinkedIn Long",
        "Story-driven narrative.",
        'PLATFORM: LinkedIn. LENGTH: Long form (300-500 words). STRUCTURE: "Broetry" '
        "spacing. Open with a strong story, failure or result. Agitate the problem. Solve "
        "it with a unique insight. End with a lesson. FORMATTING: One sentence per line "
        "for emphasis. NO DASHES. NO EM-DASHES.",
    ),
    ContentFormat(
        "ig_short",
        "Instagram Short",
        "Visual caption.",
        "PLATFORM: Instagram Caption. FOCUS: Emotional connection to the image. Short, "
        "relatable, heavy use of line breaks. Include 3-5 relevant hashtags at the bottom. "
        "NO DASHES.",
    ),
    ContentFormat(
        "ig_carousel",
        "Instagram Carousel (Editorial)",
        "High-performance narrative arc.",
        """\
PLATFORM: Instagram Carousel.

CRITICAL: Scan the user's Memory Bank first. Use their specific tone, "sacred words"
and stories. The output must sound 100% like the user, not a generic AI.

NARRATIVE STRUCTURE (MAXIMUM 12 SLIDES):
1. COVER SLIDE: ONE bold sentence. Paradox, tension or hidden truth. NO subtitles.
2. CONTEXT: Historical context or "Before vs After". Show the contradiction.
3. DATA PUNCH: 1-3 hard stats proving the shift.
4. ROOT CAUSE: Explain the deeper mechanism (culture, psychology, economy).
5. PROOF/CASES (Slides 5-7): Real-life cases, metaphors or specific examples.
6. REFRAME (Slides 8-9): Zoom out. Show the bigger cultural truth.
7. FINAL INSIGHT (Slides 10-11): Quote-style summary with punch.
8. CTA (Last Slide): "Comment '[WORD]' to receive [VALUE]". Short and direct.

WRITING RULES:
SLIDE LIMIT: ABSOLUTE MAXIMUM 12 SLIDES. Rewrite or summarize to fit if needed.
Density: 30-60 words per slide, in mini editorial paragraphs (2-5 lines).
NO BULLET POINTS. NO DASHES.
Tone: Direct, journalistic, insightful. No chatty fluff.

TECHNICAL: Separate each slide with a DOUBLE LINE BREAK. Do not write "Slide 1".""",
    ),
    ContentFormat(
        "blog",
        "Blog Article",
        "SEO & Depth.",
        "PLATFORM: Blog / Medium. STRUCTURE: SEO-Optimized Headline. H1 Title. Introduction "
        "with a hook. H2 Subheaders for key points. Deep analysis. Conclusion with "
        "takeaways. Tone: Authoritative yet personal. NO DASHES.",
    ),
    ContentFormat(
        "email",
        "E-mail Newsletter",
        "Personal inbox letter.",
        "PLATFORM: Email. STRUCTURE: Subject Line (High Open Rate). Salutation. Personal "
        "Story Bridge, then The Lesson/Value, then Soft Sell or CTA. Tone: Intimate, "
        '"writing to a friend". NO DASHES.',
    ),
    ContentFormat(
        "video_short",
        "Short Video Script",
        "TikTok/Reels (<60s).",
        "PLATFORM: TikTok/Reels/Shorts. LENGTH: Under 60 seconds spoken. STRUCTURE: 0-3s "
        "(Visual Hook), 3-45s (The Value/Story fast-paced), 45-60s (CTA). Include "
        "[VISUAL CUES] in brackets. NO DASHES in the script dialogue.",
    ),
    ContentFormat(
        "video_long",
        "Long Video Script",
        "YouTube deep dive.",
        "PLATFORM: YouTube. LENGTH: Long form script. STRUCTURE: The Tease (What we will "
        "cover), The Intro (Who am I), The Meat (Deep dive points with examples), The "
        "Outro. Include [VISUAL CUES] and [B-ROLL SUGGESTIONS]. NO DASHES.",
    ),
]

FOCUS_AREAS = [
    FocusArea("belief", "Core Belief", "Use a strong opinion or value.",
              (MemoryType.BELIEF, MemoryType.FACT)),
    FocusArea("failure", "Past Failure", "Vulnerability and lessons learned.",
              (MemoryType.FAILURE, MemoryType.LESSON)),
    FocusArea("story", "Personal Story", "A specific life event.",
              (MemoryType.STORY, MemoryType.EMOTION)),
    FocusArea("analogy", "Analogy/Metaphor", "Explain complex topics simply.",
              (MemoryType.ANALOGY,)),
    FocusArea("neutral", "Pure Value (Neutral)", "Focus on the topic, not the person."),
]

FRAMEWORKS = [
    Framework(
        "unpopular-opinion",
        "The Unpopular Opinion",
        "Call out a common industry lie and state your truth.",
        "polarize",
        "belief",
        ("x_short", "x_thread", "li_short"),
        """\
FRAMEWORK: THE UNPOPULAR OPINION
1. Identify a commonly held belief in the niche (The "Lie").
2. Immediately contradict it with the User's specific Belief (The "Truth").
3. Provide 3 quick reasons why the Lie is dangerous.
4. End with a definitive statement.
TONE: Bold, confident, slightly aggressive.""",
    ),
    Framework(
        "stop-doing-this",
        "Stop Doing This",
        "A wake-up call to the audience about a specific mistake.",
        "polarize",
        "belief",
        ("x_thread", "li_long", "video_short"),
        """\
FRAMEWORK: THE WAKE UP CALL
1. Hook: "Stop [Action X]. It is killing your [Result Y]."
2. Agitate: Explain why people do it (comfort) and why it fails.
3. Solution: Insert the User's Belief or Method as the better alternative.
4. CTA: Challenge the reader to change today.""",
    ),
    Framework(
        "scars-to-stars",
        "Scars to Stars",
        "How a painful failure led to a specific success.",
        "connect",
        "failure",
        ("li_long", "blog", "email", "video_long"),
        """\
FRAMEWORK: SCARS TO STARS
1. Start in the middle of the bad moment (The Failure memory). Visceral details.
2. The Pivot Point: What realization changed everything?
3. The Result: Where you are now.
4. The Lesson: One sentence takeaway for the reader.
TONE: Vulnerable, humble, then authoritative.""",
    ),
    Framework(
        "dear-younger-me",
        "Dear Younger Me",
        "Advice you wish you had 5 years ago.",
        "connect",
        "failure",
        ("x_thread", "li_long"),
        """\
FRAMEWORK: LETTER TO SELF
1. Hook: "I wish I knew this [Time Period] ago."
2. List 3-5 mistakes you made (derived from Failure memories).
3. Correct each mistake with a Lesson.
4. Closing: "Be patient.\"""",
    ),
    Framework(
        "complex-simple",
        "Like a 5-Year Old",
        "Explain a hard concept using a simple metaphor.",
        "educate",
        "analogy",
        ("x_short", "li_short", "video_short"),
        """\
FRAMEWORK: THE SIMPLIFIER
1. State the complex problem/topic.
2. "Think of it like [User's Analogy Memory]..."
3. Map the parts of the analogy to the problem.
4. The "Aha!" moment.""",
    ),
    Framework(
        "how-to-guide",
        "The Tactical Guide",
        "Pure value. Step-by-step instructions.",
        "educate",
        "neutral",
        ("x_thread", "li_long", "blog", "ig_carousel"),
        """\
FRAMEWORK: TACTICAL GUIDE
1. Hook: Promise a specific result (e.g. "How to get X in Y days").
2. The Method: Step 1, Step 2, Step 3.
3. Pro-Tip: A small nuance often missed.
4. Outcome: What happens when you execute this.
NOTE: Focus purely on utility.""",
    ),
    Framework(
        "hero-moment",
        "The Defining Moment",
        "A story about overcoming a specific obstacle.",
        "motivate",
        "story",
        ("li_long", "email", "blog"),
        """\
FRAMEWORK: THE DEFINING MOMENT
1. Set the scene: A specific Story memory where the user faced a choice.
2. The struggle: Why was it hard?
3. The action: What did they do?
4. The takeaway: Why the reader can do it too.
TONE: Inspiring, high energy.""",
    ),
]

_FORMATS_BY_ID = {f.id: f for f in FORMATS}
_FRAMEWORKS_BY_ID = {f.id: f for f in FRAMEWORKS}
_FOCUS_BY_ID = {f.id: f for f in FOCUS_AREAS}


def get_format(format_id: str) -> ContentFormat:
    """Look up a format by id. Raises KeyError for unknown ids."""
    return _FORMATS_BY_ID[format_id]


def get_framework(framework_id: str) -> Framework:
    """Look up a framework by id. Raises KeyError for unknown ids."""
    return _FRAMEWORKS_BY_ID[framework_id]


def focus_types_for(framework: Framework) -> list[MemoryType]:
    """Memory types a framework's focus area draws on (empty for neutral)."""
    return list(_FOCUS_BY_ID[framework.focus_id].memory_types)


def frameworks_for(intention_id: str | None = None, format_id: str | None = None) -> list[Framework]:
    return [
        f
        for f in FRAMEWORKS
        if (intention_id is None or f.intention_id == intention_id)
        and (format_id is None or format_id in f.format_ids)
    ]


def format_rules(content_format: ContentFormat) -> str:
    return f"STRICT FORMATTING RULES ({content_format.label}):\n{content_format.structure}"


def framework_blueprint(framework: Framework) -> str:
    return f"*** CRITICAL: FOLLOW THIS FRAMEWORK BLUEPRINT ***\n{framework.blueprint}"
