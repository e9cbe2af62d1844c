"""Exporter - deterministic code and document generation from a specification.

Output depends only on the specification's content and the export
options: no timestamps, no random ids. Exporting the same input twice
yields byte-identical files, which is what makes the package cacheable.
"""

import re
from typing import Any

from ..core.cache import LRUCache
from ..core.hash import hash_fields
from ..core.json import safe_json_dumps
from ..core.logging_config import get_logger
from ..monitoring.metrics import MetricsCollector, metrics_collector
from .errors import ExportError
from .models import (
    ComponentNode,
    ExportFile,
    ExportFormat,
    ExportOptions,
    ExportPackage,
    FileType,
    Specification,
)

logger = get_logger(__name__)

COMPONENT_IMPORT = "@/components/generative"
SCHEMA_URL = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_TITLE = "UI-Smith Generated UI"
SCHEMA_VERSION = "1.0.0"
TREE_FILE = "component-tree.txt"
SCHEMA_FILE = "ui-spec.schema.json"
CSS_FILE = "generated.css"
README_FILE = "README.md"

_PROP_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_:\-]*$")

TAILWIND_CSS = """/* Custom styles for generated components */

/* Base component customizations */
.generated-ui {
  @apply min-h-screen bg-slate-50 dark:bg-slate-950;
}

/* Button customizations */
.generated-button-primary {
  @apply bg-gradient-to-r from-violet-600 to-purple-600 text-white;
  @apply hover:from-violet-700 hover:to-purple-700;
  @apply shadow-lg shadow-violet-500/25;
}

/* Card customizations */
.generated-card {
  @apply bg-white dark:bg-slate-900;
  @apply rounded-xl shadow-lg;
  @apply border border-slate-200 dark:border-slate-800;
}

/* Form customizations */
.generated-form-input {
  @apply w-full px-4 py-2;
  @apply border border-slate-200 dark:border-slate-700;
  @apply rounded-lg bg-white dark:bg-slate-800;
  @apply focus:ring-2 focus:ring-violet-500/50 focus:border-violet-500;
}

/* Chart customizations */
.generated-chart {
  @apply bg-white dark:bg-slate-900;
  @apply rounded-xl border border-slate-200 dark:border-slate-800;
  @apply p-6;
}

/* Animation classes */
@keyframes fade-in {
  from { opacity: 0; }
  to { opacity: 1; }
}

@keyframes slide-up {
  from {
    opacity: 0;
    transform: translateY(20px);
  }
  to {
    opacity: 1;
    transform: translateY(0);
  }
}

.animate-fade-in {
  animation: fade-in 0.3s ease-out;
}

.animate-slide-up {
  animation: slide-up 0.4s ease-out;
}
"""


# ============================================================================
# Construction expressions
# ============================================================================


def render_prop(key: str, value: Any, continuation: str = "") -> str | None:
    """
    Render one property as a JSX attribute.

    Args:
        key: Property name
        value: Property value
        continuation: Indent for the continuation lines of multi-line JSON

    Returns:
        The attribute text, or None for null values (omitted)
    """
    if not _PROP_NAME.match(key):
        raise ExportError(f"Property name '{key}' cannot be rendered as an attribute")

    match value:
        case None:
            return None
        case bool(flag):
            return key if flag else f"{key}={{false}}"
        case int() | float():
            return f"{key}={{{safe_json_dumps(value)}}}"
        case str(text) if '"' not in text and "\n" not in text:
            return f'{key}="{text}"'
        case str():
            return f"{key}={{{safe_json_dumps(value)}}}"
        case _:
            literal = safe_json_dumps(value, indent=2).replace("\n", "\n" + continuation)
            return f"{key}={{{literal}}}"


def render_props(properties: dict[str, Any], indent: str) -> list[str]:
    rendered = (render_prop(key, value, indent) for key, value in properties.items())
    return [attr for attr in rendered if attr is not None]


def _check_kind(kind: str) -> str:
    if not (kind.isascii() and kind.isidentifier()):
        raise ExportError(f"Component kind '{kind}' is not a valid identifier", kind=kind)
    return kind


def _distinct_kinds(components: list[ComponentNode]) -> list[str]:
    return list(dict.fromkeys(_check_kind(c.kind) for c in components))


def _element(component: ComponentNode, indent: str) -> str:
    attrs = render_props(component.properties, indent + "  ")
    if not attrs:
        return f"{indent}<{component.kind} />"
    body = "\n".join(f"{indent}  {attr}" for attr in attrs)
    return f"{indent}<{component.kind}\n{body}\n{indent}/>"


# ============================================================================
# Renderers
# ============================================================================


def page_code(components: list[ComponentNode], framework: str) -> str:
    """Single page rendering every component in order."""
    kinds = _distinct_kinds(components)
    body = "\n\n".join(_element(c, "      ") for c in components)
    main = f'    <main className="min-h-screen bg-slate-50 dark:bg-slate-950">\n{body}\n    </main>'
    imports = f'import {{ {", ".join(kinds)} }} from "{COMPONENT_IMPORT}";\n\n' if kinds else ""

    if framework == "nextjs":
        return f'"use client";\n\n{imports}export default function GeneratedPage() {{\n  return (\n{main}\n  );\n}}\n'
    return f"{imports}function GeneratedPage() {{\n  return (\n{main}\n  );\n}}\n\nexport default GeneratedPage;\n"


def component_code(component: ComponentNode) -> str:
    """Stand-alone example module for one component."""
    kind = _check_kind(component.kind)
    return (
        f'import {{ {kind} }} from "{COMPONENT_IMPORT}";\n\n'
        f"export function Example{kind}() {{\n"
        f"  return (\n{_element(component, '    ')}\n  );\n}}\n"
    )


def json_schema(spec: Specification) -> str:
    document = {
        "$schema": SCHEMA_URL,
        "title": SCHEMA_TITLE,
        "version": SCHEMA_VERSION,
        "metadata": {
            "name": spec.name,
            "version": spec.metadata.version,
            "generatedBy": "UI-Smith",
            "componentCount": len(spec.components),
            "fingerprint": spec.fingerprint(),
        },
        "components": [
            {"id": f"component-{index}", "type": c.kind, "props": c.properties}
            for index, c in enumerate(spec.components)
        ],
    }
    if spec.layout is not None:
        document["layout"] = spec.layout.model_dump(mode="json", exclude_none=True)
    return safe_json_dumps(document, indent=2) + "\n"


def component_tree(spec: Specification) -> str:
    lines = ["GeneratedPage"]
    last = len(spec.components) - 1
    for index, component in enumerate(spec.components):
        prefix = "└── " if index == last else "├── "
        names = list(component.properties)
        preview = ", ".join(names[:3]) + ("..." if len(names) > 3 else "")
        lines.append(f"{prefix}{component.kind} ({preview})")
    return "\n".join(lines) + "\n"


def storybook_story(kind: str, instances: list[ComponentNode], typescript: bool = True) -> str:
    """Stories file for one kind, one story per instance in the specification."""
    stories = []
    for position, component in enumerate(instances):
        name = "Default" if position == 0 else f"Variant{position + 1}"
        args = safe_json_dumps(component.properties, indent=2).replace("\n", "\n  ")
        annotation = ": Story" if typescript else ""
        stories.append(f"export const {name}{annotation} = {{\n  args: {args},\n}};")

    if typescript:
        header = (
            'import type { Meta, StoryObj } from "@storybook/react";\n'
            f'import {{ {kind} }} from "{COMPONENT_IMPORT}";\n\n'
            f"const meta: Meta<typeof {kind}> = {{\n"
        )
        footer = f"export default meta;\ntype Story = StoryObj<typeof {kind}>;\n\n"
    else:
        header = f'import {{ {kind} }} from "{COMPONENT_IMPORT}";\n\nconst meta = {{\n'
        footer = "export default meta;\n\n"

    meta = (
        f'  title: "Generative/{kind}",\n'
        f"  component: {kind},\n"
        "  parameters: {\n"
        '    layout: "centered",\n'
        "  },\n"
        '  tags: ["autodocs"],\n'
        "};\n\n"
    )
    return header + meta + footer + "\n\n".join(stories) + "\n"


def readme(spec: Specification) -> str:
    kinds = "\n".join(f"- {kind}" for kind in dict.fromkeys(spec.kinds())) or "- (none)"
    return f"""# {spec.name}

{spec.description or "Generated with UI-Smith."}

## Components Used

{kinds}

## Installation

1. Copy the generated files to your project
2. Ensure you have the required dependencies:

```bash
npm install framer-motion lucide-react recharts
```

3. Import and use the components in your app

## Customization

Edit `{CSS_FILE}` to customize styles or modify the component props directly.

---
Specification version {spec.metadata.version}, fingerprint {spec.fingerprint()}
"""


INSTRUCTIONS = {
    ExportFormat.REACT: "Copy the page into your app directory and import generated.css from your root layout.",
    ExportFormat.JSON: "Load ui-spec.schema.json into any renderer that understands the component kinds.",
    ExportFormat.TREE: "component-tree.txt shows the page structure with the first properties of each component.",
    ExportFormat.STORYBOOK: "Place the .stories files next to your Storybook configuration and run storybook dev.",
    ExportFormat.FULL: "Copy the page and stylesheet into your app; the schema and tree describe the same UI.",
}


class Exporter:
    """
    Renders specifications to export packages.

    Packages are memoised in an LRU cache keyed by the specification's
    content fingerprint, its version and the export options.
    """

    def __init__(
        self,
        enable_cache: bool = True,
        cache_size: int = 64,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.cache: LRUCache[ExportPackage] | None = LRUCache(max_size=cache_size) if enable_cache else None
        self.metrics = metrics or metrics_collector

    def export(self, spec: Specification, options: ExportOptions | None = None) -> ExportPackage:
        """
        Export a specification.

        Raises:
            ExportError: If a component kind or property cannot be rendered
        """
        options = options or ExportOptions()
        key = hash_fields(spec.fingerprint(), str(spec.metadata.version), options.cache_key())

        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                self.metrics.record_cache_hit("export")
                logger.debug("export_cache_hit", format=options.format.value)
                return cached
            self.metrics.record_cache_miss("export")

        package = ExportPackage(
            format=options.format,
            files=tuple(self._files(spec, options)),
            instructions=INSTRUCTIONS[options.format],
            fingerprint=spec.fingerprint(),
        )
        if self.cache is not None:
            self.cache.set(key, package)

        logger.info("export_complete", format=options.format.value, files=[f.name for f in package.files])
        return package

    def _files(self, spec: Specification, options: ExportOptions) -> list[ExportFile]:
        match options.format:
            case ExportFormat.REACT:
                return self._react_files(spec, options)
            case ExportFormat.JSON:
                _distinct_kinds(spec.components)
                return [ExportFile(name=SCHEMA_FILE, content=json_schema(spec), type=FileType.CONFIG)]
            case ExportFormat.TREE:
                _distinct_kinds(spec.components)
                return [ExportFile(name=TREE_FILE, content=component_tree(spec), type=FileType.DOCUMENT)]
            case ExportFormat.STORYBOOK:
                return self._storybook_files(spec, options)
            case ExportFormat.FULL:
                return [
                    *self._react_files(spec, options),
                    ExportFile(name=SCHEMA_FILE, content=json_schema(spec), type=FileType.CONFIG),
                    ExportFile(name=TREE_FILE, content=component_tree(spec), type=FileType.DOCUMENT),
                    ExportFile(name=README_FILE, content=readme(spec), type=FileType.DOCUMENT),
                ]
        raise ExportError(f"Unsupported export format: {options.format}")

    @staticmethod
    def _react_files(spec: Specification, options: ExportOptions) -> list[ExportFile]:
        ext = "tsx" if options.typescript else "jsx"
        if options.single_file:
            files = [
                ExportFile(
                    name=f"page.{ext}",
                    content=page_code(spec.components, options.framework),
                    type=FileType.COMPONENT,
                )
            ]
        else:
            files = [
                ExportFile(name=f"{c.kind}Example{i}.{ext}", content=component_code(c), type=FileType.COMPONENT)
                for i, c in enumerate(spec.components)
            ]
        if options.include_css:
            files.append(ExportFile(name=CSS_FILE, content=TAILWIND_CSS, type=FileType.STYLE))
        return files

    @staticmethod
    def _storybook_files(spec: Specification, options: ExportOptions) -> list[ExportFile]:
        ext = "tsx" if options.typescript else "jsx"
        return [
            ExportFile(
                name=f"{kind}.stories.{ext}",
                content=storybook_story(kind, [c for c in spec.components if c.kind == kind], options.typescript),
                type=FileType.COMPONENT,
            )
            for kind in _distinct_kinds(spec.components)
        ]
