"""Declarative detection rule tables.

Each record maps one family of signals to a technology tag. Tables are
ordered; the classifier evaluates them top to bottom and the first rule that
contributes a tag also decides its origin.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import fnmatchcase

from stackguard.models.signal import GENERIC_TAG, Signal, SignalKind

# Directories never entered by the scanner and never scanned by detector hooks
EXCLUDED_DIRECTORIES: tuple[str, ...] = (
    ".git",
    "node_modules",
    ".venv",
    "venv",
    "env",
    "__pycache__",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    "dist",
    "build",
    "target",
    ".next",
    "coverage",
)

# JSON package manifests read for dependency signals
DEPENDENCY_MANIFESTS: tuple[str, ...] = (
    "package.json",
    "client/package.json",
    "server/package.json",
)

SOURCE_ROOTS: tuple[str, ...] = ("src", "client/src", "server/src", "app", "lib")


def _under(path: str, root: str) -> bool:
    return path == root or path.startswith(root + "/")


@dataclass(frozen=True)
class MarkerRule:
    """Tag contributed by the presence of a file or directory."""

    tag: str
    label: str
    paths: tuple[str, ...]

    def matches(self, signal: Signal) -> bool:
        if signal.kind not in (SignalKind.FILE, SignalKind.DIRECTORY):
            return False
        return any(fnmatchcase(signal.value, path) for path in self.paths)


@dataclass(frozen=True)
class ExtensionRule:
    """Tag contributed by file extensions, optionally scoped to source roots.

    With ``within`` set, each root is judged on its own: the rule fires when
    some root holds one of ``extensions`` and none of ``unless``.
    """

    tag: str
    label: str
    extensions: tuple[str, ...]
    within: tuple[str, ...] = ()
    unless: tuple[str, ...] = ()

    def evaluate(self, signals: Iterable[Signal]) -> bool:
        seen_by_scope: dict[str, set[str]] = {}
        for signal in signals:
            if signal.kind != SignalKind.EXTENSION:
                continue
            if not self.within:
                seen_by_scope.setdefault(".", set()).add(signal.value)
                continue
            for root in self.within:
                if _under(signal.source_path, root):
                    seen_by_scope.setdefault(root, set()).add(signal.value)

        for seen in seen_by_scope.values():
            if seen.intersection(self.extensions) and not seen.intersection(self.unless):
                return True
        return False


@dataclass(frozen=True)
class DependencyRule:
    """Tag contributed by a declared package dependency."""

    tag: str
    label: str
    names: tuple[str, ...] = ()
    contains: tuple[str, ...] = ()

    def matches(self, signal: Signal) -> bool:
        if signal.kind != SignalKind.DEPENDENCY:
            return False
        if signal.value in self.names:
            return True
        return any(fragment in signal.value for fragment in self.contains)


MARKER_RULES: tuple[MarkerRule, ...] = (
    # Frontend
    MarkerRule("react-frontend", "React Frontend Enterprise", ("client/package.json",)),
    MarkerRule("node-backend", "Node.js Backend Enterprise", ("server/package.json",)),
    MarkerRule("nodejs", "Node.js Application", ("package.json",)),
    MarkerRule("vite", "Vite Build System", ("vite.config.js", "vite.config.mjs", "client/vite.config.mjs")),
    MarkerRule("typescript", "TypeScript", ("tsconfig.json", "client/tsconfig.json")),
    MarkerRule("nextjs", "Next.js Framework", ("next.config.js",)),
    MarkerRule("nuxtjs", "Nuxt.js Framework", ("nuxt.config.js", "nuxt.config.ts")),
    MarkerRule("angular", "Angular Framework", ("angular.json",)),
    MarkerRule("vuejs", "Vue.js Framework", ("vue.config.js",)),
    MarkerRule("svelte", "Svelte Framework", ("svelte.config.js",)),
    # Backend and databases
    MarkerRule("sql-enterprise", "Enterprise SQL", ("developmentQueries.sql", "prod-scripts.sql")),
    MarkerRule("prisma", "Prisma ORM", ("prisma/schema.prisma",)),
    MarkerRule("knex", "Knex.js Query Builder", ("knexfile.js",)),
    MarkerRule("sequelize", "Sequelize ORM", ("sequelize.config.js",)),
    # Python and data science
    MarkerRule("python", "Python Application", ("requirements.txt",)),
    MarkerRule("python-modern", "Modern Python Project", ("pyproject.toml",)),
    MarkerRule("pipenv", "Pipenv Package Manager", ("Pipfile",)),
    MarkerRule("poetry", "Poetry Package Manager", ("poetry.lock",)),
    MarkerRule("conda", "Conda Environment", ("environment.yml",)),
    MarkerRule("jupyter", "Jupyter Notebooks", ("jupyter",)),
    # .NET
    MarkerRule("aspnet", "ASP.NET Core", ("appsettings.json",)),
    MarkerRule("dotnet-sdk", ".NET SDK Project", ("global.json",)),
    # JVM
    MarkerRule("maven", "Maven Project", ("pom.xml",)),
    MarkerRule("gradle", "Gradle Project", ("build.gradle", "build.gradle.kts")),
    MarkerRule("spring", "Spring Framework", ("application.properties",)),
    # Mobile
    MarkerRule("react-native", "React Native", ("ios/Podfile", "android/build.gradle")),
    MarkerRule("flutter", "Flutter Framework", ("flutter/pubspec.yaml",)),
    MarkerRule("ionic", "Ionic Framework", ("capacitor.config.ts",)),
    # DevOps and infrastructure
    MarkerRule("docker", "Docker Containers", ("Dockerfile",)),
    MarkerRule("docker-compose", "Docker Compose", ("docker-compose.yml", "docker-compose.yaml")),
    MarkerRule("kubernetes", "Kubernetes Manifests", ("kubernetes",)),
    MarkerRule("helm", "Helm Charts", ("helm",)),
    MarkerRule("terraform", "Terraform Infrastructure", ("terraform",)),
    MarkerRule("ansible", "Ansible Playbooks", ("ansible",)),
    MarkerRule("github-actions", "GitHub Actions CI/CD", (".github/workflows/*.yml",)),
    MarkerRule("gitlab-ci", "GitLab CI/CD", (".gitlab-ci.yml",)),
    MarkerRule("azure-devops", "Azure DevOps", ("azure-pipelines.yml",)),
    MarkerRule("jenkins", "Jenkins CI/CD", ("Jenkinsfile", "jenkinsfile")),
    # Testing
    MarkerRule("jest", "Jest Testing", ("jest.config.js", "server/jest.config.js")),
    MarkerRule("cypress", "Cypress E2E Testing", ("cypress.config.js",)),
    MarkerRule("playwright", "Playwright Testing", ("playwright.config.js",)),
    MarkerRule("vitest", "Vitest Testing", ("vitest.config.js",)),
    MarkerRule("karma", "Karma Testing", ("karma.conf.js",)),
    MarkerRule("protractor", "Protractor E2E", ("protractor.conf.js",)),
    # Bundlers
    MarkerRule("webpack", "Webpack Bundler", ("webpack.config.js",)),
    MarkerRule("rollup", "Rollup Bundler", ("rollup.config.js",)),
    MarkerRule("parcel", "Parcel Bundler", ("parcel",)),
    MarkerRule("esbuild", "ESBuild", ("esbuild.config.js",)),
    # Governance
    MarkerRule("enterprise-governance", "Enterprise Code Governance", ("CODEOWNERS",)),
    MarkerRule("sonarqube", "SonarQube Analysis", ("sonar-project.properties",)),
)

EXTENSION_RULES: tuple[ExtensionRule, ...] = (
    ExtensionRule("sql", "SQL Database Scripts", (".sql",)),
    ExtensionRule("python", "Python Scripts", (".py",)),
    ExtensionRule("jupyter", "Jupyter Notebooks", (".ipynb",)),
    ExtensionRule("dotnet", ".NET Core/Framework", (".csproj",)),
    ExtensionRule("dotnet-solution", "Visual Studio Solution", (".sln",)),
    ExtensionRule("java", "Java Application", (".java",)),
    ExtensionRule("kotlin", "Kotlin Application", (".kt",)),
    ExtensionRule("scala", "Scala Application", (".scala",)),
    ExtensionRule("powerapps", "Power Apps", (".msapp",)),
    ExtensionRule("powerbi", "Power BI", (".pbit", ".pbix")),
    ExtensionRule("powerautomate", "Power Automate", (".flow",)),
    # Source directory analysis
    ExtensionRule("react-components", "React Components", (".tsx", ".jsx"), within=SOURCE_ROOTS),
    ExtensionRule("typescript-pure", "TypeScript Sources", (".ts",), within=SOURCE_ROOTS, unless=(".tsx",)),
    ExtensionRule("python-source", "Python Sources", (".py",), within=SOURCE_ROOTS),
)

DEPENDENCY_RULES: tuple[DependencyRule, ...] = (
    DependencyRule("react", "React", names=("react", "@types/react")),
    DependencyRule("vuejs", "Vue.js Framework", names=("vue", "@vue/cli-service")),
    DependencyRule("angular", "Angular Framework", names=("@angular/core",)),
    DependencyRule("node-server", "Node.js Server", names=("express", "koa", "fastify")),
    DependencyRule("express", "Express.js", names=("express",)),
    DependencyRule("styled-components", "Styled Components", names=("styled-components",)),
    DependencyRule("typescript", "TypeScript", names=("typescript", "@types/react")),
    DependencyRule("vite", "Vite Build System", names=("vite",)),
    DependencyRule(
        "enterprise-framework",
        "Enterprise Framework",
        contains=("shell", "enterprise", "sede"),
    ),
)


def marker_paths(rules: Iterable[MarkerRule] = MARKER_RULES) -> tuple[str, ...]:
    """Return every marker path named by the rules, first occurrence order."""
    paths: dict[str, None] = {}
    for rule in rules:
        for path in rule.paths:
            paths.setdefault(path, None)
    return tuple(paths)


def _build_labels() -> dict[str, str]:
    labels: dict[str, str] = {}
    for rule in (*MARKER_RULES, *EXTENSION_RULES, *DEPENDENCY_RULES):
        labels.setdefault(rule.tag, rule.label)
    labels[GENERIC_TAG] = "Generic Project (Universal Rules)"
    return labels


TAG_LABELS: dict[str, str] = _build_labels()


def tag_label(tag: str) -> str:
    """Human readable name of a tag, or the tag itself when unknown."""
    return TAG_LABELS.get(tag, tag)
