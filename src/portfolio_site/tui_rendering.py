from __future__ import annotations

from portfolio_site.models.content import (
    ContentDocument,
    Locale,
    ProjectEntry,
    PublicationEntry,
    TimelineEntry,
)

ALL_CATEGORIES = "all"


def project_categories(document: ContentDocument) -> list[str]:
    """Filter tabs: ``all`` followed by each project category in first-seen order."""
    categories = [ALL_CATEGORIES]
    for project in document.projects:
        if project.category not in categories:
            categories.append(project.category)
    return categories


def filter_projects(document: ContentDocument, category: str) -> list[ProjectEntry]:
    if category == ALL_CATEGORIES:
        return list(document.projects)
    return [p for p in document.projects if p.category == category]


def render_loading() -> str:
    return "# Loading...\n\n_Fetching portfolio content._"


def render_hero(document: ContentDocument, locale: Locale) -> str:
    profile = document.profile
    parts = [
        f"# {profile.name}",
        f"## {profile.role.get(locale)}",
        profile.tagline.get(locale),
    ]
    contact = " | ".join(part for part in (profile.email, profile.location) if part)
    if contact:
        parts.append(f"\n`{contact}`")
    parts.append(f"\n{profile.about.get(locale)}")
    return "\n".join(parts)


def _render_timeline_entry(entry: TimelineEntry, locale: Locale) -> list[str]:
    lines = [
        f"### {entry.year} · {entry.title.get(locale)}",
        f"*{entry.institution}* ({entry.kind})",
    ]
    logos = entry.logo_refs
    if logos:
        lines.append(f"Logos: {', '.join(logos)}")
    lines.append("")
    lines.append(entry.description.get(locale))
    return lines


def render_timeline(document: ContentDocument, locale: Locale) -> str:
    parts = [f"## {document.ui_text('history', locale)}"]
    if not document.history:
        parts.append("- (No entries)")
    for entry in document.history:
        parts.append("")
        parts.extend(_render_timeline_entry(entry, locale))
    return "\n".join(parts)


def _render_project(project: ProjectEntry, document: ContentDocument, locale: Locale) -> list[str]:
    lines = [
        f"### {project.title.get(locale)}",
        f"`{project.category.upper()}`",
        "",
        project.description.get(locale),
    ]
    if project.technologies:
        lines.append("")
        lines.append(" ".join(f"`{tech}`" for tech in project.technologies))

    links: list[str] = []
    if project.link:
        links.append(f"[{document.ui_text('viewProject', locale)}]({project.link})")
    if project.play_store_link:
        links.append(f"[Play Store]({project.play_store_link})")
    if project.app_store_link:
        links.append(f"[App Store]({project.app_store_link})")
    if project.github_url:
        links.append(f"[GitHub]({project.github_url})")
    if links:
        lines.append("")
        lines.append(" · ".join(links))
    return lines


def render_projects(
    document: ContentDocument, locale: Locale, category: str = ALL_CATEGORIES
) -> str:
    parts = [f"## {document.ui_text('projects', locale)}"]

    tabs = []
    for tab in project_categories(document):
        label = document.ui_text(ALL_CATEGORIES, locale) if tab == ALL_CATEGORIES else tab
        tabs.append(f"**[{label}]**" if tab == category else label)
    parts.append(" | ".join(tabs))

    projects = filter_projects(document, category)
    if not projects:
        parts.append("\n- (No projects in this category)")
    for project in projects:
        parts.append("")
        parts.extend(_render_project(project, document, locale))
    return "\n".join(parts)


def _render_publication(pub: PublicationEntry) -> list[str]:
    lines = []
    if pub.tags:
        lines.append(" ".join(f"#{tag}" for tag in pub.tags))
    lines.append(f"### {pub.title}")
    lines.append(pub.short_authors())
    lines.append(f"*{pub.venue}, {pub.year}*")

    links: list[str] = []
    if pub.doi_url:
        links.append(f"[DOI]({pub.doi_url})")
    if pub.pdf_link:
        links.append(f"[PDF]({pub.pdf_link})")
    if pub.github_url:
        links.append(f"[Code]({pub.github_url})")
    if links:
        lines.append(" · ".join(links))
    return lines


def render_publications(document: ContentDocument, locale: Locale) -> str:
    parts = [f"## {document.ui_text('papers', locale)}"]
    if not document.publications:
        parts.append("- (No publications)")
    for pub in document.publications:
        parts.append("")
        parts.extend(_render_publication(pub))
    return "\n".join(parts)


def render_socials(document: ContentDocument, locale: Locale) -> str:
    parts = [f"## {document.ui_text('connect', locale)}"]
    for social in document.profile.socials:
        handle = f" ({social.username})" if social.username else ""
        parts.append(f"- [{social.network}]({social.url}){handle}")
    parts.append("")
    parts.append(
        f"`s` {document.ui_text('downloadCvShort', locale)} · "
        f"`x` {document.ui_text('downloadCvLong', locale)}"
    )
    return "\n".join(parts)


def render_page(
    document: ContentDocument, locale: Locale, category: str = ALL_CATEGORIES
) -> str:
    """Whole scrollable page: hero, timeline, projects, publications, contact footer."""
    sections = [
        render_hero(document, locale),
        render_timeline(document, locale),
        render_projects(document, locale, category),
        render_publications(document, locale),
        render_socials(document, locale),
    ]
    return "\n\n---\n\n".join(sections)
