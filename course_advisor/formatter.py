"""
Turn ranked results into learner-facing text (Dutch or English).

Nothing in here decides anything: the engine passes in the courses,
lessons and intent it already settled on and gets back strings, the
static follow-up questions and the action links to render.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .catalog_index import CatalogIndex
from .config import (
    COURSE_URL_TEMPLATE,
    COURSES_INDEX_URL,
    LESSON_URL_TEMPLATE,
    SUPPORT_EMAIL,
    TOP_LESSON_LINKS,
    TOP_SUGGESTIONS,
)
from .intent import Intent
from .models import ActionLink, ContentMatch, Course

FOLLOW_UP_QUESTIONS: Dict[str, Dict[Intent, List[str]]] = {
    "nl": {
        Intent.COURSE_SELECTION: [
            "Wat is uw huidige ervaringsniveau met AI?",
            "Hoeveel tijd heeft u per week beschikbaar?",
            "Bent u geïnteresseerd in technische of praktische toepassingen?",
        ],
        Intent.LEARNING_PATH: [
            "Wat is uw uiteindelijke leerdoel?",
            "Heeft u al ervaring met programmeren?",
            "Wilt u zich specialiseren in een bepaald gebied?",
        ],
        Intent.CONTENT_QUESTION: [
            "Wilt u meer weten over de praktische toepassingen?",
            "Zoekt u beginners- of gevorderde informatie?",
            "Heeft u interesse in gerelateerde onderwerpen?",
        ],
        Intent.SKILL_MATCHING: [
            "Wat zijn uw huidige vaardigheden?",
            "Welke tools gebruikt u momenteel?",
            "Wat wilt u kunnen na de cursus?",
        ],
        Intent.PRICING: [
            "Bent u geïnteresseerd in een specifieke cursus?",
            "Zoekt u zakelijke tarieven?",
            "Wilt u informatie over bundels?",
        ],
        Intent.COURSE_COMPARISON: [
            "Welke aspecten wilt u vergelijken?",
            "Wat is voor u het belangrijkste: prijs, inhoud of niveau?",
            "Heeft u een voorkeur voor een bepaalde aanpak?",
        ],
        Intent.TECHNICAL_HELP: [
            "Is het probleem opgelost?",
            "Heeft u nog andere technische vragen?",
            "Wilt u contact met support?",
        ],
        Intent.GENERAL_INFO: [
            "Waar bent u specifiek in geïnteresseerd?",
            "Wilt u onze cursussen bekijken?",
            "Heeft u vragen over AI-toepassingen?",
        ],
    },
    "en": {
        Intent.COURSE_SELECTION: [
            "What is your current experience level with AI?",
            "How much time do you have available per week?",
            "Are you interested in technical or practical applications?",
        ],
        Intent.LEARNING_PATH: [
            "What is your ultimate learning goal?",
            "Do you have programming experience?",
            "Do you want to specialize in a specific area?",
        ],
        Intent.CONTENT_QUESTION: [
            "Would you like to know more about practical applications?",
            "Are you looking for beginner or advanced information?",
            "Are you interested in related topics?",
        ],
        Intent.SKILL_MATCHING: [
            "What are your current skills?",
            "Which tools do you currently use?",
            "What do you want to be able to do after the course?",
        ],
        Intent.PRICING: [
            "Are you interested in a specific course?",
            "Are you looking for business rates?",
            "Would you like information about bundles?",
        ],
        Intent.COURSE_COMPARISON: [
            "Which aspects would you like to compare?",
            "What is most important to you: price, content, or level?",
            "Do you have a preference for a certain approach?",
        ],
        Intent.TECHNICAL_HELP: [
            "Has the issue been resolved?",
            "Do you have other technical questions?",
            "Would you like to contact support?",
        ],
        Intent.GENERAL_INFO: [
            "What are you specifically interested in?",
            "Would you like to browse our courses?",
            "Do you have questions about AI applications?",
        ],
    },
}


def follow_up_questions(intent: Intent, language: str) -> List[str]:
    table = FOLLOW_UP_QUESTIONS.get(language, FOLLOW_UP_QUESTIONS["en"])
    return list(table.get(intent, table[Intent.GENERAL_INFO]))


def _price(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


# ---------------------------
# Course-based answers
# ---------------------------

def format_course_recommendations(courses: Sequence[Course], keywords: Sequence[str], language: str) -> str:
    nl = language == "nl"
    if not courses:
        return (
            "Er zijn geen cursussen gevonden die aan uw criteria voldoen. Probeer andere zoektermen."
            if nl else
            "No courses found matching your criteria. Please try different search terms."
        )
    topic = ", ".join(keywords)
    lines = [
        f'Op basis van uw vraag over "{topic}", raad ik de volgende cursussen aan:'
        if nl else
        f'Based on your query about "{topic}", I recommend the following courses:',
        "",
    ]
    for i, course in enumerate(courses[:TOP_SUGGESTIONS], 1):
        lines += [
            f"**{i}. {course.title}**",
            f"• {'Niveau' if nl else 'Level'}: {course.level}",
            f"• {'Duur' if nl else 'Duration'}: {course.duration}",
            f"• {course.description}",
            f"• {'Prijs' if nl else 'Price'}: €{_price(course.price)}",
            "",
        ]
    return "\n".join(lines)


def format_learning_path(courses: Sequence[Course], language: str) -> str:
    nl = language == "nl"
    if not courses:
        return (
            "Ik kon geen leertraject samenstellen voor dit doel. Kunt u uw doel specifieker omschrijven?"
            if nl else
            "I couldn't put together a learning path for this goal. Could you describe your goal more specifically?"
        )
    lines = ["Hier is een aanbevolen leertraject voor u:" if nl else "Here is a recommended learning path for you:", ""]
    for i, course in enumerate(courses, 1):
        lines += [
            f"**{'Stap' if nl else 'Step'} {i}: {course.title}**",
            f"• {'Niveau' if nl else 'Level'}: {course.level}",
            f"• {'Geschatte tijd' if nl else 'Estimated time'}: {course.duration}",
            f"• Focus: {course.short_description or course.description}",
            "",
        ]
    lines.append(
        "Dit traject bouwt geleidelijk uw kennis op van basis tot geavanceerd niveau."
        if nl else
        "This path gradually builds your knowledge from foundation to advanced level."
    )
    return "\n".join(lines)


def format_skill_matching(level: str, courses: Sequence[Course], language: str) -> str:
    if language == "nl":
        dutch_level = {"intermediate": "gevorderd", "advanced": "gevorderd"}.get(level, level)
        header = f"Voor uw niveau ({dutch_level}) zijn deze cursussen het meest geschikt:"
    else:
        header = f"For your skill level ({level}), these courses are most suitable:"
    rows = [f"{i}. **{c.title}** - {c.level}" for i, c in enumerate(courses[:TOP_SUGGESTIONS], 1)]
    return header + "\n\n" + "\n".join(rows)


# ---------------------------
# Content answers
# ---------------------------

def format_content_answer(query: str, related: Sequence[ContentMatch], language: str) -> str:
    if language == "nl":
        if not related:
            return f'Ik kon geen specifieke informatie vinden over "{query}". Kunt u uw vraag anders formuleren?'
        return (
            f'Hier is relevante informatie over "{query}":\n\n'
            "Ik heb gerelateerde content gevonden in onze cursussen. "
            "Klik op de links hieronder om de specifieke lessen te bekijken waar dit onderwerp wordt behandeld."
        )
    if not related:
        return f'I couldn\'t find specific information about "{query}". Could you rephrase your question?'
    return (
        f'Here\'s relevant information about "{query}":\n\n'
        "I found related content in our courses. "
        "Click the links below to view specific lessons where this topic is covered."
    )


# ---------------------------
# Static answers
# ---------------------------

def pricing_text(language: str) -> str:
    if language == "nl":
        return (
            "Onze cursussen variëren in prijs afhankelijk van de inhoud en het niveau:\n\n"
            "• Beginner cursussen: €29 - €49\n"
            "• Gevorderde cursussen: €49 - €99\n"
            "• Expert cursussen: €99 - €199\n"
            "• Complete learning paths: €149 - €299\n\n"
            "We bieden regelmatig kortingen aan voor bundels en vroege vogels. "
            "Neem contact op voor zakelijke tarieven."
        )
    return (
        "Our courses vary in price depending on content and level:\n\n"
        "• Beginner courses: €29 - €49\n"
        "• Advanced courses: €49 - €99\n"
        "• Expert courses: €99 - €199\n"
        "• Complete learning paths: €149 - €299\n\n"
        "We regularly offer discounts for bundles and early birds. Contact us for business rates."
    )


def technical_help_text(language: str) -> str:
    if language == "nl":
        return (
            "Voor technische hulp:\n\n"
            '1. **Inlogproblemen**: Gebruik de "Wachtwoord vergeten" link op de inlogpagina\n'
            "2. **Video afspelen**: Controleer uw internetverbinding en browser (Chrome/Firefox aanbevolen)\n"
            "3. **Voortgang niet opgeslagen**: Ververs de pagina en log opnieuw in\n\n"
            f"Voor verdere hulp, email {SUPPORT_EMAIL}"
        )
    return (
        "For technical help:\n\n"
        '1. **Login issues**: Use the "Forgot password" link on the login page\n'
        "2. **Video playback**: Check your internet connection and browser (Chrome/Firefox recommended)\n"
        "3. **Progress not saving**: Refresh the page and log in again\n\n"
        f"For further assistance, email {SUPPORT_EMAIL}"
    )


def general_info_text(language: str) -> str:
    if language == "nl":
        return (
            "GroeimetAI is hét platform voor AI-educatie in Nederland. We bieden:\n\n"
            "• Praktische AI-cursussen voor alle niveaus\n"
            "• Focus op direct toepasbare kennis\n"
            "• Nederlandstalige content met internationale kwaliteit\n"
            "• Begeleiding door AI-experts\n\n"
            "Waar kan ik u mee helpen? U kunt vragen stellen over cursussen, leertrajecten, "
            "of specifieke AI-onderwerpen."
        )
    return (
        "GroeimetAI is the leading AI education platform. We offer:\n\n"
        "• Practical AI courses for all levels\n"
        "• Focus on immediately applicable knowledge\n"
        "• High-quality content in Dutch and English\n"
        "• Guidance from AI experts\n\n"
        "How can I help you? You can ask about courses, learning paths, or specific AI topics."
    )


def comparison_clarification(language: str) -> str:
    if language == "nl":
        return "Welke cursussen wilt u vergelijken? Geef alstublieft twee of meer cursusnamen op."
    return "Which courses would you like to compare? Please specify two or more course names."


def format_comparison(names: Sequence[str], courses: Sequence[Course], language: str) -> str:
    nl = language == "nl"
    joined = (" en " if nl else " and ").join(names)
    lines = [f"{'Vergelijking tussen' if nl else 'Comparison between'} {joined}:", ""]
    for course in courses:
        lines.append(
            f"• **{course.title}** - {course.level}, {course.duration}, €{_price(course.price)}"
        )
    if courses:
        lines.append("")
    lines.append(
        "Beide cursussen bieden waardevolle kennis, maar verschillen in focus en aanpak. "
        "Vraag om een gedetailleerde vergelijking van specifieke aspecten."
        if nl else
        "Both courses offer valuable knowledge but differ in focus and approach. "
        "Ask for a detailed comparison of specific aspects."
    )
    return "\n".join(lines)


# ---------------------------
# Action links
# ---------------------------

def course_links(courses: Sequence[Course], numbered: bool = False) -> List[ActionLink]:
    return [
        ActionLink(
            text=f"{i}. {c.title}" if numbered else c.title,
            url=COURSE_URL_TEMPLATE.format(course_id=c.id),
            type="course",
        )
        for i, c in enumerate(courses, 1)
    ]


def lesson_links(matches: Sequence[ContentMatch], index: CatalogIndex, language: str) -> List[ActionLink]:
    fallback = "Gerelateerde cursus" if language == "nl" else "Related Course"
    links: List[ActionLink] = []
    for m in matches[:TOP_LESSON_LINKS]:
        entry = index.get(m.course_id)
        links.append(
            ActionLink(
                text=entry.course.title if entry is not None else fallback,
                url=LESSON_URL_TEMPLATE.format(course_id=m.course_id, module_id=m.module_id, lesson_id=m.lesson_id),
                type="lesson",
            )
        )
    return links


def browse_courses_link(language: str) -> ActionLink:
    return ActionLink(
        text="Bekijk alle cursussen" if language == "nl" else "View all courses",
        url=COURSES_INDEX_URL,
        type="external",
    )


def support_link() -> ActionLink:
    return ActionLink(text="Contact Support", url=f"mailto:{SUPPORT_EMAIL}", type="external")
