"""
Resume extraction from heading-structured Markdown.
"""

import re
from typing import Dict, List, Optional, Tuple

from resume_content.models.base import Extraction, ParseResult, SkippedRecord
from resume_content.models.markdown import MarkdownDocument, Section
from resume_content.models.resume import (
    Achievement,
    EducationItem,
    ExperienceItem,
    Language,
    PersonalInfo,
    Period,
    QualificationSummary,
    ResumeData,
    Skill,
    SkillCategory,
    SkillLevel,
)
from resume_content.services.vocabulary import Vocabulary, load_vocabulary
from resume_content.utils.date_parser import PERIOD_RE, find_period
from resume_content.utils.line_parser import (
    BulletAchievement,
    BulletResponsibility,
    FreeText,
    MetadataField,
    strip_emphasis,
    tokenize,
)
from resume_content.utils.logger import get_logger
from resume_content.utils.markdown import find_section, section_with_children, split_sections

logger = get_logger(__name__)


# Title keywords per resume field, English and Portuguese, in priority order
SECTION_KEYWORDS: Dict[str, List[str]] = {
    "contact": ["contact", "contato", "information", "informações"],
    "summary": ["summary", "qualification", "resumo", "qualificação", "profile", "perfil"],
    "objective": ["objective", "objetivo"],
    "experience": ["experience", "experiência", "professional", "profissional"],
    "education": ["education", "educação", "formação", "academic", "acadêmica"],
    "skills": ["skills", "competências", "habilidades", "technical", "técnicas"],
    "languages": ["language", "idioma"],
    "activities": ["activities", "atividades", "volunteer", "voluntariado"],
}

URL_KEYS = ("linkedin", "github", "website")
EMAIL_RE = re.compile(r'[\w.-]+@[\w.-]+\.\w+')
PHONE_RE = re.compile(r'\+?\(?\d[\d\s()\-]{8,}\d')
URL_RE = re.compile(
    r'(?:https?://|www\.)[^\s<>()\[\]|]+|\b(?:linkedin\.com|github\.com)/[^\s<>()\[\]|]+',
    re.IGNORECASE,
)
LOCATION_LABEL_RE = re.compile(r'^(?:location|localização|local|endereço)\s*:\s*(.+)$', re.IGNORECASE)
LOCATION_RE = re.compile(r"([^\W\d_][\w\s.'-]*?,\s*[A-Z]{2})\b")
CONTACT_LABEL_RE = re.compile(
    r'^(?:e-?mail|phone|telefone|celular|linkedin|github|website|site|portfolio|portfólio)\s*:',
    re.IGNORECASE,
)
ROLE_SPLIT_RE = re.compile(r'\s+(?:at|@)\s+')
EDUCATION_SPLIT_RE = re.compile(r'\s+(?:at|@|[-–|,])\s+')
CATEGORY_LINE_RE = re.compile(r'^(?P<name>[^:]{2,60}):\s*(?P<skills>.*)$')
SKILL_ANNOTATION_RE = re.compile(r'^(?P<name>.+?)\s*\((?P<meta>[^)]*)\)\s*$')
YEARS_RE = re.compile(r'(\d+(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?|anos?)', re.IGNORECASE)
LANGUAGE_RE = re.compile(r'^(?P<name>[^:()\-–]+?)\s*(?:[-–:]\s*(?P<prof>.+)|\((?P<paren>[^)]+)\))$')
TEAM_SIZE_RE = re.compile(r'\d+')

INSTITUTION_KEYWORDS = (
    "university", "college", "institute", "school", "academy",
    "universidade", "faculdade", "instituto", "escola", "centro universitário",
)

LEVEL_ALIASES = {
    "expert": SkillLevel.EXPERT.value,
    "especialista": SkillLevel.EXPERT.value,
    "advanced": SkillLevel.ADVANCED.value,
    "avançado": SkillLevel.ADVANCED.value,
    "intermediate": SkillLevel.INTERMEDIATE.value,
    "intermediário": SkillLevel.INTERMEDIATE.value,
    "beginner": SkillLevel.BEGINNER.value,
    "iniciante": SkillLevel.BEGINNER.value,
    "básico": SkillLevel.BEGINNER.value,
}

TECHNOLOGY_LABELS = {"technologies", "tecnologias", "tech stack", "stack", "tools", "ferramentas"}
LOCATION_LABELS = {"location", "local", "localização"}
PERIOD_LABELS = {"period", "período", "dates", "datas"}
TEAM_LABELS = {"team size", "team", "equipe", "tamanho da equipe"}
BUDGET_LABELS = {"budget", "orçamento"}
GPA_LABELS = {"gpa", "cr", "média"}
HONORS_LABELS = {"honors", "honours", "honrarias", "distinções"}
CERTIFICATION_LABELS = {"certifications", "certificações"}

DEFAULT_LANGUAGE_PROFICIENCY = "Fluent"


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in re.split(r'[,;]', value) if part.strip()]


def _split_parts(text: str) -> List[str]:
    """Split a header on pipes after removing any year range."""
    stripped = PERIOD_RE.sub('', text)
    parts = (part.strip(' ,-–()') for part in re.split(r'\s*\|\s*', stripped))
    return [part for part in parts if part]


def _normalize_url(url: str) -> str:
    url = url.rstrip('.,;')
    if not re.match(r'^https?://', url, re.IGNORECASE):
        url = f"https://{url}"
    return url


class ResumeExtractor:
    """Turn resume Markdown into a ResumeData record using keyword heuristics."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        """
        Initialize resume extractor.

        Args:
            vocabulary: Technology vocabulary; the bundled one when omitted
        """
        self.vocabulary = vocabulary or load_vocabulary()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def extract(self, markdown: str) -> Tuple[ResumeData, List[SkippedRecord]]:
        """
        Extract a resume, keeping partial results.

        Args:
            markdown: Resume Markdown, optionally with YAML front matter

        Returns:
            Tuple of (resume, candidates that were skipped and why)
        """
        document = split_sections(markdown)
        sections = document.sections

        experience = self.extract_experience(self._body(sections, "experience"))
        education = self.extract_education(self._body(sections, "education"))
        skills = self.extract_skills(self._body(sections, "skills"), self._title(sections, "skills"))

        resume = ResumeData(
            personal_info=self.extract_personal_info(document),
            objective=self._objective(sections),
            summary=self.extract_summary(sections),
            experience=experience.records,
            education=education.records,
            skills=skills.records,
            languages=self.extract_languages(self._body(sections, "languages")),
            activities=self.extract_activities(self._body(sections, "activities")),
        )

        skipped = experience.skipped + education.skipped + skills.skipped
        for record in skipped:
            logger.warning(f"Skipped {record.kind} '{record.title}': {', '.join(record.reasons)}")
        return resume, skipped

    def parse(self, markdown: str) -> ParseResult:
        """
        Parse resume Markdown into a ParseResult.

        Never raises: an empty or unrecognisable document yields a failure
        with a single ``general`` error.
        """
        resume, _ = self.extract(markdown)
        meaningful = (
            resume.personal_info.name or resume.experience or resume.skills
            or resume.education or resume.summary.items
        )
        if not meaningful:
            return ParseResult.error("general", "No resume content found in markdown")
        return ParseResult.ok(resume)

    # ------------------------------------------------------------------
    # Section lookup
    # ------------------------------------------------------------------

    @staticmethod
    def _find(sections: List[Section], field: str) -> Optional[Section]:
        return find_section(sections, SECTION_KEYWORDS[field])

    def _body(self, sections: List[Section], field: str) -> str:
        section = self._find(sections, field)
        return section_with_children(sections, section) if section else ""

    def _title(self, sections: List[Section], field: str) -> str:
        section = self._find(sections, field)
        return section.title if section else ""

    # ------------------------------------------------------------------
    # Personal information
    # ------------------------------------------------------------------

    def extract_personal_info(self, document: MarkdownDocument) -> PersonalInfo:
        sections = document.sections
        header = sections[0] if sections and sections[0].level == 1 else None
        contact = self._find(sections, "contact")

        text_blocks = []
        if header:
            text_blocks.append(header.content)
        if contact and contact is not header:
            text_blocks.append(contact.content)
        text = "\n".join(text_blocks)

        info = {
            "name": header.title if header else "",
            "title": self._headline(header.content) if header else "",
            "location": "",
            "email": "",
            "phone": "",
        }

        email = EMAIL_RE.search(text)
        if email:
            info["email"] = email.group(0)

        for line in text.splitlines():
            plain = strip_emphasis(line).lstrip('-•* ').strip()
            if not plain or plain == info["title"]:
                continue

            if not info["phone"]:
                phone = PHONE_RE.search(EMAIL_RE.sub(' ', URL_RE.sub(' ', plain)))
                if phone and sum(ch.isdigit() for ch in phone.group(0)) >= 10:
                    info["phone"] = phone.group(0).strip()

            for url in URL_RE.findall(plain):
                self._tag_url(info, plain, url)

            if not info["location"]:
                labelled = LOCATION_LABEL_RE.match(plain)
                if labelled:
                    info["location"] = labelled.group(1).strip()
                elif '@' not in plain and not URL_RE.search(plain):
                    located = LOCATION_RE.search(plain)
                    if located:
                        info["location"] = located.group(1).strip()

        for key in ("name", "title", "email", "phone", "location", "linkedin", "github", "website"):
            value = document.front_matter.get(key)
            if not value:
                continue
            value = str(value).strip()
            info[key] = _normalize_url(value) if key in URL_KEYS else value

        return PersonalInfo(**info)

    @staticmethod
    def _headline(content: str) -> str:
        for line in content.splitlines():
            plain = strip_emphasis(line).lstrip('-•* ').strip()
            if not plain or CONTACT_LABEL_RE.match(plain) or LOCATION_LABEL_RE.match(plain):
                continue
            if EMAIL_RE.search(plain) or URL_RE.search(plain) or '|' in plain:
                continue
            if sum(ch.isdigit() for ch in plain) >= 10:
                continue
            return plain
        return ""

    @staticmethod
    def _tag_url(info: Dict, line: str, url: str) -> None:
        lowered = f"{line} {url}".lower()
        if "linkedin" in lowered and "linkedin" not in info:
            info["linkedin"] = _normalize_url(url)
        elif "github" in lowered and "github" not in info:
            info["github"] = _normalize_url(url)
        elif "website" not in info and "linkedin" not in url.lower() and "github" not in url.lower():
            info["website"] = _normalize_url(url)

    # ------------------------------------------------------------------
    # Summary, objective, activities
    # ------------------------------------------------------------------

    def extract_summary(self, sections: List[Section]) -> QualificationSummary:
        section = self._find(sections, "summary") or self._find(sections, "objective")
        if not section:
            return QualificationSummary()
        items = [self._line_text(line) for line in tokenize(section_with_children(sections, section))]
        return QualificationSummary(title=section.title, items=[item for item in items if item])

    def _objective(self, sections: List[Section]) -> Optional[str]:
        section = self._find(sections, "objective")
        if not section:
            return None
        text = " ".join(self._line_text(line) for line in tokenize(section.content))
        return text.strip() or None

    def extract_activities(self, content: str) -> List[str]:
        items = [self._line_text(line) for line in tokenize(content)]
        return [item for item in items if item]

    @staticmethod
    def _line_text(line) -> str:
        if isinstance(line, MetadataField):
            return f"{line.label}: {line.value}"
        return strip_emphasis(getattr(line, "text", ""))

    # ------------------------------------------------------------------
    # Experience
    # ------------------------------------------------------------------

    def extract_experience(self, content: str) -> Extraction:
        """
        Extract experience entries.

        A bold or capitalised line opens an entry; ``Title at Company``
        supplies position and company, a year range sets the period and
        bullets become achievements (when quantified) or responsibilities.

        Args:
            content: Experience section body including subsections

        Returns:
            Extraction with complete entries and skipped candidates
        """
        extraction = Extraction[ExperienceItem]()
        draft: Optional[Dict] = None

        for line in tokenize(content):
            if isinstance(line, FreeText) and line.emphasized:
                self._close_experience(draft, extraction)
                draft = self._open_experience(line.plain)
                continue
            if draft is None:
                continue

            draft["text"].append(getattr(line, "text", "") or getattr(line, "value", ""))

            if isinstance(line, MetadataField):
                self._experience_metadata(draft, line)
            elif isinstance(line, BulletAchievement):
                draft["achievements"].append(Achievement(metric=line.metric, description=line.text))
            elif isinstance(line, BulletResponsibility):
                draft["responsibilities"].append(line.text)
            elif isinstance(line, FreeText):
                self._experience_text(draft, line.text)

        self._close_experience(draft, extraction)
        return extraction

    def _open_experience(self, header: str) -> Dict:
        draft = {
            "position": "",
            "company": "",
            "location": "",
            "period": None,
            "description": [],
            "achievements": [],
            "responsibilities": [],
            "technologies": [],
            "team_size": None,
            "budget": None,
            "text": [header],
            "header": header,
            "seen_body": False,
        }

        period = find_period(header)
        if period:
            draft["period"] = period

        parts = _split_parts(header)
        role_part = next((part for part in parts if ROLE_SPLIT_RE.search(part)), None)
        if role_part:
            position, company = ROLE_SPLIT_RE.split(role_part, maxsplit=1)
            draft["position"], draft["company"] = position.strip(), company.strip()
            remaining = [part for part in parts if part is not role_part]
        elif parts:
            draft["position"] = parts[0]
            remaining = parts[1:]
        else:
            remaining = []

        for part in remaining:
            if not draft["location"] and LOCATION_RE.search(part):
                draft["location"] = part
            elif not draft["company"]:
                draft["company"] = part

        return draft

    def _experience_metadata(self, draft: Dict, line: MetadataField) -> None:
        label = line.label.lower()
        if label in TECHNOLOGY_LABELS:
            for name in _split_list(line.value):
                draft["technologies"].append(self.vocabulary.technologies.canonical(name))
        elif label in LOCATION_LABELS:
            draft["location"] = line.value
        elif label in PERIOD_LABELS:
            draft["period"] = find_period(line.value) or draft["period"]
        elif label in TEAM_LABELS:
            digits = TEAM_SIZE_RE.search(line.value)
            if digits:
                draft["team_size"] = int(digits.group(0))
        elif label in BUDGET_LABELS:
            draft["budget"] = line.value
        elif label in {"company", "empresa"}:
            draft["company"] = line.value
        elif label in {"position", "role", "cargo"}:
            draft["position"] = line.value

    def _experience_text(self, draft: Dict, text: str) -> None:
        plain = strip_emphasis(text)
        period = find_period(plain)
        if period:
            draft["period"] = period

        parts = _split_parts(plain)
        leftover = []
        for part in parts:
            if not draft["location"] and LOCATION_RE.fullmatch(part):
                draft["location"] = part
            else:
                leftover.append(part)

        if not draft["company"] and not draft["seen_body"] and leftover:
            draft["company"] = leftover.pop(0)
        draft["seen_body"] = True

        if leftover and not period:
            draft["description"].append(" ".join(leftover))

    def _close_experience(self, draft: Optional[Dict], extraction: Extraction) -> None:
        if draft is None:
            return

        reasons = []
        if not draft["position"]:
            reasons.append("missing position")
        if not draft["company"]:
            reasons.append("missing company")
        if reasons:
            extraction.skipped.append(SkippedRecord(kind="experience", title=draft["header"], reasons=reasons))
            return

        technologies = list(draft["technologies"])
        for name in self.vocabulary.technologies.match(" ".join(draft["text"])):
            if name not in technologies:
                technologies.append(name)

        extraction.records.append(ExperienceItem(
            id=f"exp-{len(extraction.records) + 1}",
            position=draft["position"],
            company=draft["company"],
            location=draft["location"],
            period=draft["period"] or Period(),
            description=" ".join(draft["description"]),
            achievements=draft["achievements"],
            technologies=list(dict.fromkeys(technologies)),
            responsibilities=draft["responsibilities"],
            team_size=draft["team_size"],
            budget=draft["budget"],
        ))

    # ------------------------------------------------------------------
    # Education
    # ------------------------------------------------------------------

    def extract_education(self, content: str) -> Extraction:
        extraction = Extraction[EducationItem]()
        draft: Optional[Dict] = None

        for line in tokenize(content):
            if isinstance(line, FreeText) and line.emphasized:
                self._close_education(draft, extraction)
                draft = self._open_education(line.plain)
                continue
            if draft is None:
                continue

            if isinstance(line, MetadataField):
                label = line.label.lower()
                if label in GPA_LABELS:
                    draft["gpa"] = line.value
                elif label in HONORS_LABELS:
                    draft["honors"] = _split_list(line.value)
                elif label in CERTIFICATION_LABELS:
                    draft["certifications"] = _split_list(line.value)
                elif label in LOCATION_LABELS:
                    draft["location"] = line.value
                elif label in PERIOD_LABELS:
                    draft["period"] = find_period(line.value) or draft["period"]
                elif label in {"institution", "instituição"}:
                    draft["institution"] = line.value
                continue

            plain = strip_emphasis(line.text)
            period = find_period(plain)
            if period:
                draft["period"] = period
                plain = PERIOD_RE.sub('', plain).strip(' |,-–')
            if not plain:
                continue

            if not draft["institution"] and self._is_institution(plain):
                draft["institution"] = plain
            elif not draft["location"] and LOCATION_RE.fullmatch(plain):
                draft["location"] = plain
            else:
                draft["description"].append(plain)

        self._close_education(draft, extraction)
        return extraction

    def _open_education(self, header: str) -> Dict:
        draft = {
            "degree": "",
            "institution": "",
            "location": "",
            "period": find_period(header),
            "description": [],
            "gpa": None,
            "honors": None,
            "certifications": None,
            "header": header,
        }
        stripped = PERIOD_RE.sub('', header).strip(' |,-–')
        parts = [part.strip() for part in EDUCATION_SPLIT_RE.split(stripped) if part.strip()]
        if parts:
            draft["degree"] = parts[0]
        for part in parts[1:]:
            if not draft["institution"]:
                draft["institution"] = part
            elif not draft["location"]:
                draft["location"] = part
        return draft

    @staticmethod
    def _is_institution(text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in INSTITUTION_KEYWORDS)

    @staticmethod
    def _education_type(text: str) -> str:
        lowered = text.lower()
        if "certif" in lowered:
            return "certification"
        if "course" in lowered or "curso" in lowered:
            return "course"
        return "degree"

    def _close_education(self, draft: Optional[Dict], extraction: Extraction) -> None:
        if draft is None:
            return
        if not draft["degree"]:
            extraction.skipped.append(SkippedRecord(kind="education", title=draft["header"], reasons=["missing degree"]))
            return

        extraction.records.append(EducationItem(
            id=f"edu-{len(extraction.records) + 1}",
            degree=draft["degree"],
            institution=draft["institution"],
            location=draft["location"],
            period=draft["period"] or Period(),
            description=" ".join(draft["description"]) or None,
            gpa=draft["gpa"],
            honors=draft["honors"],
            certifications=draft["certifications"],
            type=self._education_type(draft["degree"]),
        ))

    # ------------------------------------------------------------------
    # Skills and languages
    # ------------------------------------------------------------------

    def extract_skills(self, content: str, default_category: str = "") -> Extraction:
        """
        Extract skill categories.

        Categories come from bold lines, ``Name:`` lines or
        ``**Category:** a, b`` fields; bullets are comma-split into skills,
        each optionally annotated like ``Python (Expert, 8 years)``.
        """
        extraction = Extraction[SkillCategory]()
        current: Optional[Dict] = None

        def close():
            if current is None:
                return
            if current["skills"]:
                extraction.records.append(SkillCategory(name=current["name"], skills=current["skills"]))
            else:
                extraction.skipped.append(
                    SkippedRecord(kind="skill category", title=current["name"], reasons=["no skills listed"])
                )

        for line in tokenize(content):
            if isinstance(line, MetadataField):
                close()
                current = {"name": line.label, "skills": self._parse_skills(line.value, line.label)}
                continue

            if isinstance(line, FreeText):
                plain = line.plain
                category_line = CATEGORY_LINE_RE.match(plain)
                if line.emphasized or category_line:
                    close()
                    if category_line:
                        name = category_line.group("name").strip()
                        inline = category_line.group("skills")
                    else:
                        name, inline = plain.rstrip(':'), ""
                    current = {"name": name, "skills": self._parse_skills(inline, name)}
                    continue

            if current is None:
                current = {"name": default_category or "Skills", "skills": []}
            current["skills"].extend(self._parse_skills(strip_emphasis(line.text), current["name"]))

        close()
        return extraction

    def _parse_skills(self, text: str, category: str) -> List[Skill]:
        skills = []
        for chunk in self._split_skill_list(text):
            name, level, years = chunk, SkillLevel.ADVANCED.value, None
            annotated = SKILL_ANNOTATION_RE.match(chunk)
            if annotated:
                parsed_level, parsed_years = self._parse_annotation(annotated.group("meta"))
                if parsed_level or parsed_years is not None:
                    name = annotated.group("name").strip()
                    level = parsed_level or level
                    years = parsed_years
            skills.append(Skill(name=name, level=level, years_of_experience=years, category=category))
        return skills

    @staticmethod
    def _split_skill_list(text: str) -> List[str]:
        # Commas inside "(Expert, 8 years)" annotations do not separate skills
        chunks, depth, buffer = [], 0, []
        for ch in text:
            if ch == '(':
                depth += 1
            elif ch == ')':
                depth = max(depth - 1, 0)
            if ch == ',' and depth == 0:
                chunks.append("".join(buffer))
                buffer = []
            else:
                buffer.append(ch)
        chunks.append("".join(buffer))
        return [chunk.strip() for chunk in chunks if chunk.strip()]

    @staticmethod
    def _parse_annotation(meta: str) -> Tuple[Optional[str], Optional[float]]:
        level, years = None, None
        for part in meta.split(','):
            part = part.strip()
            alias = LEVEL_ALIASES.get(part.lower())
            if alias:
                level = alias
                continue
            match = YEARS_RE.search(part)
            if match:
                value = float(match.group(1))
                years = int(value) if value.is_integer() else value
        return level, years

    def extract_languages(self, content: str) -> List[Language]:
        languages = []
        for line in tokenize(content):
            if isinstance(line, MetadataField):
                languages.append(Language(name=line.label, proficiency=line.value or DEFAULT_LANGUAGE_PROFICIENCY))
                continue

            plain = strip_emphasis(line.text)
            match = LANGUAGE_RE.match(plain)
            if match:
                proficiency = (match.group("prof") or match.group("paren") or "").strip()
                languages.append(Language(
                    name=match.group("name").strip(),
                    proficiency=proficiency or DEFAULT_LANGUAGE_PROFICIENCY,
                ))
            elif plain:
                languages.append(Language(name=plain, proficiency=DEFAULT_LANGUAGE_PROFICIENCY))
        return languages


def parse_resume_markdown(markdown: str, vocabulary: Optional[Vocabulary] = None) -> ParseResult:
    """Parse resume Markdown with a default extractor."""
    return ResumeExtractor(vocabulary).parse(markdown)
