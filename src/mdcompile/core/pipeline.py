"""Compile orchestration: includes -> render -> validate -> infer -> codegen -> cache"""

import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Any, Iterable, Optional

from mdcompile.config import Settings
from mdcompile.core.cache import CompileCache
from mdcompile.core.codegen import gen_page_data_code
from mdcompile.core.guard import TEMPLATE_BREAKER, gen_replace_regex, replace_constants
from mdcompile.core.includes import resolve_includes
from mdcompile.core.links import find_dead_links, normalize_pages
from mdcompile.core.metadata import infer_description, infer_title
from mdcompile.core.models import CleanUrlsMode, CompileResult, PageData, RenderEnv
from mdcompile.core.parse import discover_pages
from mdcompile.core.render import MarkdownRenderer
from mdcompile.core.utils.git import get_git_timestamp
from mdcompile.core.utils.paths import relative_path


logger = logging.getLogger(__name__)


class MarkdownCompiler:
    """Compile markdown pages under src_dir into component source units.

    Create one per build or dev session. The compiler owns its result cache;
    call clear_cache() when configuration that affects rendering changes.
    """

    def __init__(
        self,
        src_dir: str,
        pages: Iterable[str],
        *,
        renderer: Optional[MarkdownRenderer] = None,
        cache: Optional[CompileCache] = None,
        user_defines: Optional[dict[str, Any]] = None,
        is_build: bool = False,
        include_last_updated: bool = False,
        clean_urls: CleanUrlsMode = CleanUrlsMode.disabled,
        parser_config: str = "gfm-like",
        header_levels: Iterable[int] = (2, 3),
        ) -> None:
        self.src_dir = os.path.abspath(src_dir)
        self.pages = normalize_pages(pages)
        self.renderer = renderer or MarkdownRenderer(parser_config, header_levels)
        self.cache = cache if cache is not None else CompileCache()
        self.replace_regex = gen_replace_regex(user_defines, is_build)
        self.include_last_updated = include_last_updated
        self.clean_urls = CleanUrlsMode(clean_urls)

    @classmethod
    def from_settings(cls, settings: Settings, pages: Iterable[str]) -> "MarkdownCompiler":
        return cls(
            str(Path(settings.src_dir).resolve()),
            pages,
            cache=CompileCache(settings.cache_size),
            user_defines=settings.defines,
            is_build=settings.is_build,
            include_last_updated=settings.last_updated,
            clean_urls=settings.clean_urls,
            parser_config=settings.parser_config,
            header_levels=settings.header_levels,
        )

    def clear_cache(self) -> None:
        self.cache.clear()

    async def compile(self, source: str, file_path: str, public_dir: str) -> CompileResult:
        """Compile one markdown file. Renderer errors propagate and nothing is cached."""
        rel_path = relative_path(self.src_dir, file_path)
        key = CompileCache.key(source, file_path)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("[cache hit] %s", rel_path)
            return cached

        start = time.perf_counter()
        file_dir = os.path.dirname(file_path)
        expanded, includes = resolve_includes(source, file_dir)

        env = RenderEnv(path=file_path, relative_path=rel_path, clean_urls=self.clean_urls)
        html = self.renderer.render(expanded, env)

        dead_links = find_dead_links(env.data.links, file_path, self.src_dir, self.pages, public_dir)

        frontmatter = env.frontmatter
        last_updated = await get_git_timestamp(file_path) if self.include_last_updated else None
        page_data = PageData(
            title=infer_title(frontmatter, env.content),
            title_template=frontmatter.get("titleTemplate"),
            description=infer_description(frontmatter),
            frontmatter=frontmatter,
            headers=env.data.headers,
            relative_path=rel_path,
            last_updated=last_updated,
        )

        tags = gen_page_data_code(env.data.hoisted_tags, page_data, self.replace_regex)
        template = replace_constants(html, self.replace_regex, TEMPLATE_BREAKER)
        unit_source = "\n".join(tags) + f"\n<template><div>{template}</div></template>"

        result = CompileResult(
            unit_source=unit_source,
            page_data=page_data,
            dead_links=dead_links,
            includes=includes,
        )
        self.cache.set(key, result)
        logger.debug("[render] %s in %dms.", file_path, (time.perf_counter() - start) * 1000)
        return result

    async def compile_file(self, path: Path, public_dir: str) -> CompileResult:
        """Read path as UTF-8 and compile it."""
        source = path.read_text(encoding="utf-8")
        return await self.compile(source, str(path.resolve()), public_dir)


def unit_path(output_dir: Path, rel_path: str) -> Path:
    """Output location of a compiled page: 'guide/intro.md' -> <out>/guide/intro.vue."""
    return output_dir / Path(rel_path).with_suffix(".vue")


def write_result(result: CompileResult, output_dir: Path) -> tuple[Path, Path]:
    """Write the unit source and a page data sidecar JSON. Returns (unit_path, json_path)."""
    out = unit_path(output_dir, result.page_data.relative_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    json_path = out.with_suffix(".json")
    out.write_text(result.unit_source, encoding="utf-8")
    json_path.write_text(result.page_data.to_json(), encoding="utf-8")
    return out, json_path


async def _compile_all(compiler: MarkdownCompiler, files: list[Path], public_dir: str) -> list[CompileResult]:
    return list(await asyncio.gather(*(compiler.compile_file(f, public_dir) for f in files)))


def run_build(settings: Settings, output_dir: Path) -> list[tuple[CompileResult, Path]]:
    """Compile every page under settings.src_dir and write outputs.

    Returns (result, unit_path) pairs in page order.
    """
    src_dir = Path(settings.src_dir).resolve()
    if not src_dir.is_dir():
        raise RuntimeError(f"Source directory not found: {settings.src_dir}")

    pages = discover_pages(src_dir, exclude=[settings.public_dir])
    compiler = MarkdownCompiler.from_settings(settings, pages)
    files = [src_dir / p for p in pages]
    public_dir = str(src_dir / settings.public_dir)
    try:
        results = asyncio.run(_compile_all(compiler, files, public_dir))
    except ValueError as e:
        raise RuntimeError(f"Failed to compile: {e}") from e

    output_dir.mkdir(parents=True, exist_ok=True)
    return [(r, write_result(r, output_dir)[0]) for r in results]


def run_compile(settings: Settings, path: Path) -> CompileResult:
    """Compile a single file against the pages found under settings.src_dir."""
    src_dir = Path(settings.src_dir).resolve()
    pages = discover_pages(src_dir, exclude=[settings.public_dir]) if src_dir.is_dir() else []
    compiler = MarkdownCompiler.from_settings(settings, pages)
    try:
        return asyncio.run(compiler.compile_file(path, str(src_dir / settings.public_dir)))
    except ValueError as e:
        raise RuntimeError(f"Failed to compile {path}: {e}") from e
