"""
Project portfolio extraction and rendering.
"""

import re
import unicodedata
from typing import Dict, List, Optional

from resume_content.models.base import Extraction, ParseResult, SkippedRecord
from resume_content.models.markdown import Section
from resume_content.models.project import Project
from resume_content.services.vocabulary import Vocabulary, load_vocabulary
from resume_content.utils.line_parser import Heading, MetadataField, tokenize
from resume_content.utils.logger import get_logger
from resume_content.utils.markdown import split_sections

logger = get_logger(__name__)


PROJECT_LEVELS = (2, 3)
SLUG_MAX_LENGTH = 50

# Lower-cased label -> Project attribute
FIELD_LABELS: Dict[str, str] = {
    "duration": "duration",
    "duração": "duration",
    "location": "location",
    "local": "location",
    "localização": "location",
    "client type": "client_type",
    "tipo de cliente": "client_type",
    "project type": "project_type",
    "tipo de projeto": "project_type",
    "industry": "industry",
    "indústria": "industry",
    "setor": "industry",
    "business unit": "business_unit",
    "unidade de negócio": "business_unit",
    "team size": "team_size",
    "tamanho da equipe": "team_size",
    "budget": "budget",
    "orçamento": "budget",
    "technologies": "technologies",
    "tecnologias": "technologies",
}

# Markers that open multi-line free text
NARRATIVE_LABELS: Dict[str, str] = {
    "problem": "problem",
    "problema": "problem",
    "challenge": "problem",
    "desafio": "problem",
    "action": "action",
    "ação": "action",
    "solution": "action",
    "solução": "action",
    "result": "result",
    "resultado": "result",
    "results": "result",
    "resultados": "result",
}

REQUIRED_FIELDS = (
    "duration", "location", "client_type", "project_type", "industry",
    "business_unit", "problem", "action", "result",
)

RENDER_LABELS = {
    "en": {
        "heading": "Project Portfolio",
        "duration": "Duration",
        "location": "Location",
        "client_type": "Client Type",
        "project_type": "Project Type",
        "industry": "Industry",
        "business_unit": "Business Unit",
        "team_size": "Team Size",
        "budget": "Budget",
        "technologies": "Technologies",
        "problem": "Problem",
        "action": "Action",
        "result": "Result",
    },
    "pt": {
        "heading": "Portfólio de Projetos",
        "duration": "Duração",
        "location": "Localização",
        "client_type": "Tipo de Cliente",
        "project_type": "Tipo de Projeto",
        "industry": "Indústria",
        "business_unit": "Unidade de Negócio",
        "team_size": "Tamanho da Equipe",
        "budget": "Orçamento",
        "technologies": "Tecnologias",
        "problem": "Problema",
        "action": "Ação",
        "result": "Resultado",
    },
}


def slugify(title: str) -> str:
    """
    Build a project id from its title.

    Accents are folded, anything but ASCII letters, digits and spaces is
    dropped, and spaces become dashes (at most 50 characters).
    """
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    cleaned = re.sub(r'[^a-z0-9\s]', '', folded.lower()).strip()
    return re.sub(r'\s+', '-', cleaned)[:SLUG_MAX_LENGTH].strip('-')


class ProjectExtractor:
    """Turn portfolio Markdown into Project records."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or load_vocabulary()

    def extract(self, markdown: str) -> Extraction:
        """
        Extract every level-2/3 section as a project candidate.

        Candidates missing a mandatory field are returned as skipped records
        instead of aborting the document.

        Args:
            markdown: Portfolio Markdown

        Returns:
            Extraction with projects and skipped candidates
        """
        document = split_sections(markdown)
        extraction = Extraction[Project]()
        used_ids = set()

        for section in document.sections:
            if section.level not in PROJECT_LEVELS or not section.content.strip():
                continue

            fields = self._read_fields(section)
            missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
            if missing:
                reasons = [f"missing {name}" for name in missing]
                extraction.skipped.append(SkippedRecord(kind="project", title=section.title, reasons=reasons))
                logger.warning(f"Skipped project '{section.title}': {', '.join(reasons)}")
                continue

            project_id = self._unique_id(slugify(section.title) or "project", used_ids)
            extraction.records.append(Project(
                id=project_id,
                title=section.title,
                technologies=self._technologies(fields),
                **{name: fields[name] for name in REQUIRED_FIELDS},
                team_size=fields.get("team_size"),
                budget=fields.get("budget"),
            ))

        logger.info(f"Extracted {len(extraction.records)} projects ({len(extraction.skipped)} skipped)")
        return extraction

    def parse(self, markdown: str) -> ParseResult:
        """Parse portfolio Markdown; fails only when no project survives."""
        extraction = self.extract(markdown)
        if not extraction.records:
            return ParseResult.error("general", "No valid projects found in markdown")
        return ParseResult.ok(extraction.records)

    def _read_fields(self, section: Section) -> Dict:
        fields: Dict = {"explicit_technologies": []}
        narrative: Optional[str] = None
        buffers: Dict[str, List[str]] = {"problem": [], "action": [], "result": []}

        for line in tokenize(section.content):
            if isinstance(line, MetadataField):
                label = line.label.lower()
                narrative = NARRATIVE_LABELS.get(label)
                if narrative:
                    if line.value:
                        buffers[narrative].append(line.value)
                    continue
                self._store_field(fields, FIELD_LABELS.get(label), line.value)
            elif narrative and not isinstance(line, Heading):
                buffers[narrative].append(line.text)

        for name, parts in buffers.items():
            fields[name] = " ".join(part.strip() for part in parts if part.strip())
        return fields

    def _store_field(self, fields: Dict, attribute: Optional[str], value: str) -> None:
        if attribute is None:
            return
        if attribute == "technologies":
            fields["explicit_technologies"].extend(
                self.vocabulary.technologies.canonical(name) for name in value.split(',') if name.strip()
            )
        elif attribute == "team_size":
            digits = re.search(r'\d+', value)
            fields["team_size"] = int(digits.group(0)) if digits else None
        else:
            fields[attribute] = value.strip()

    def _technologies(self, fields: Dict) -> List[str]:
        found = set(fields["explicit_technologies"])
        text = " ".join(fields[name] for name in ("problem", "action", "result"))
        found.update(self.vocabulary.technologies.match(text))
        return sorted(found)

    @staticmethod
    def _unique_id(base: str, used: set) -> str:
        candidate, counter = base, 2
        while candidate in used:
            candidate = f"{base}-{counter}"
            counter += 1
        used.add(candidate)
        return candidate


def projects_to_markdown(projects: List[Project], language: str = "en") -> str:
    """
    Render projects back into portfolio Markdown.

    The output re-extracts to the same records, so it can be fed to the
    translation tooling and parsed again.

    Args:
        projects: Projects to render
        language: ``en`` or ``pt`` field labels

    Returns:
        Markdown text
    """
    labels = RENDER_LABELS.get(language, RENDER_LABELS["en"])
    lines = [f"# {labels['heading']}", ""]

    for project in projects:
        lines.append(f"## {project.title}")
        lines.append("")
        for name in ("duration", "location", "client_type", "project_type", "industry", "business_unit"):
            lines.append(f"**{labels[name]}:** {getattr(project, name)}")
        if project.team_size is not None:
            lines.append(f"**{labels['team_size']}:** {project.team_size}")
        if project.budget:
            lines.append(f"**{labels['budget']}:** {project.budget}")
        if project.technologies:
            lines.append(f"**{labels['technologies']}:** {', '.join(project.technologies)}")
        lines.append("")
        for name in ("problem", "action", "result"):
            lines.append(f"**{labels[name]}:** {getattr(project, name)}")
            lines.append("")

    return "\n".join(lines)


def parse_projects_markdown(markdown: str, vocabulary: Optional[Vocabulary] = None) -> ParseResult:
    """Parse portfolio Markdown with a default extractor."""
    return ProjectExtractor(vocabulary).parse(markdown)
