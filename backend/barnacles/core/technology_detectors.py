"""Technology catalog used for detection and language breakdown."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TechnologyDetector:
    """How to recognize a technology in a project directory.

    Attributes:
        name: Display name, unique in the catalog
        slug: Stable identifier stored with projects and language stats
        files: Marker files or directories whose presence is sufficient evidence
        package_json_keys: Dependency names looked up in package.json
        file_extensions: Lower-cased extensions attributed to this language
    """
    name: str
    slug: str
    icon: Optional[str] = None
    color: Optional[str] = None
    files: tuple[str, ...] = ()
    package_json_keys: tuple[str, ...] = ()
    file_extensions: tuple[str, ...] = field(default=())


TECHNOLOGY_DETECTORS: list[TechnologyDetector] = [
    TechnologyDetector(
        name="JavaScript", slug="javascript", icon="javascript", color="#F7DF1E",
        files=("package.json",),
        file_extensions=(".js", ".mjs", ".cjs", ".jsx"),
    ),
    TechnologyDetector(
        name="npm", slug="npm", icon="npm", color="#CB3837",
        files=("package.json", "package-lock.json"),
    ),
    TechnologyDetector(
        name="TypeScript", slug="typescript", icon="typescript", color="#3178C6",
        files=("tsconfig.json",),
        package_json_keys=("typescript",),
        file_extensions=(".ts", ".tsx", ".mts", ".cts"),
    ),
    TechnologyDetector(
        name="Vue", slug="vue", icon="vue", color="#42B883",
        package_json_keys=("vue",),
        file_extensions=(".vue",),
    ),
    TechnologyDetector(
        name="React", slug="react", icon="react", color="#61DAFB",
        package_json_keys=("react",),
    ),
    TechnologyDetector(
        name="Next.js", slug="nextjs", icon="nextjs", color="#000000",
        files=("next.config.js", "next.config.mjs", "next.config.ts"),
        package_json_keys=("next",),
    ),
    TechnologyDetector(
        name="Nuxt", slug="nuxt", icon="nuxt", color="#00DC82",
        files=("nuxt.config.js", "nuxt.config.ts"),
        package_json_keys=("nuxt",),
    ),
    TechnologyDetector(
        name="Vite", slug="vite", icon="vite", color="#646CFF",
        files=("vite.config.js", "vite.config.ts", "vite.config.mjs"),
        package_json_keys=("vite",),
    ),
    TechnologyDetector(
        name="Electron", slug="electron", icon="electron", color="#47848F",
        package_json_keys=("electron",),
    ),
    TechnologyDetector(
        name="Tailwind CSS", slug="tailwindcss", icon="tailwindcss", color="#06B6D4",
        files=("tailwind.config.js", "tailwind.config.ts"),
        package_json_keys=("tailwindcss",),
    ),
    TechnologyDetector(
        name="Laravel", slug="laravel", icon="laravel", color="#FF2D20",
        files=("artisan",),
    ),
    TechnologyDetector(
        name="PHP", slug="php", icon="php", color="#777BB4",
        files=("composer.json",),
        file_extensions=(".php",),
    ),
    TechnologyDetector(
        name="Python", slug="python", icon="python", color="#3776AB",
        files=("requirements.txt", "pyproject.toml", "setup.py", "Pipfile", ".venv", "venv"),
        file_extensions=(".py", ".pyi"),
    ),
    TechnologyDetector(
        name="Django", slug="django", icon="django", color="#092E20",
        files=("manage.py",),
    ),
    TechnologyDetector(
        name="Rust", slug="rust", icon="rust", color="#000000",
        files=("Cargo.toml",),
        file_extensions=(".rs",),
    ),
    TechnologyDetector(
        name="Go", slug="go", icon="go", color="#00ADD8",
        files=("go.mod",),
        file_extensions=(".go",),
    ),
    TechnologyDetector(
        name="Java", slug="java", icon="java", color="#007396",
        files=("pom.xml", "build.gradle", "build.gradle.kts"),
        file_extensions=(".java",),
    ),
    TechnologyDetector(
        name="Docker", slug="docker", icon="docker", color="#2496ED",
        files=("Dockerfile", "docker-compose.yml", "docker-compose.yaml", "compose.yaml"),
    ),
    TechnologyDetector(
        name="Git", slug="git", icon="git", color="#F05032",
        files=(".git",),
    ),
    TechnologyDetector(
        name="CSS", slug="css", icon="css", color="#1572B6",
        file_extensions=(".css", ".scss", ".sass", ".less"),
    ),
    TechnologyDetector(
        name="HTML", slug="html", icon="html", color="#E34F26",
        file_extensions=(".html", ".htm"),
    ),
]


def get_detector(slug: str) -> Optional[TechnologyDetector]:
    """Look up a catalog entry by slug."""
    for detector in TECHNOLOGY_DETECTORS:
        if detector.slug == slug:
            return detector
    return None
