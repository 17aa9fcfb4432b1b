#!/usr/bin/env python3
"""
depvis.py
Граф зависимостей пакетов монорепозитория.

Пути к package.json читаются из stdin, по одному в строке. Для пакета-точки
входа выводится топологический порядок его самого и всех пакетов, которые от
него транзитивно зависят, и/или описание этого подграфа в формате DOT.

    find . -name package.json -not -path '*/node_modules/*' | depvis four topo
"""
import argparse
import enum
import logging
import os
import sys

import graphviz

from depvis_config import MODES, is_true, load_config
from depvis_errors import ConfigError, DepvisError, RenderError
from depvis_graph import build_graph, dependents_subgraph
from depvis_manifests import load_manifests, read_paths

log = logging.getLogger("depvis")


class Mode(enum.Flag):
    TOPO = 1 << 1
    VIZ = 1 << 2
    ALL = TOPO | VIZ


def parse_mode(raw):
    if raw is None or raw.lower() == "all":
        return Mode.ALL
    if raw.lower() == "topo":
        return Mode.TOPO
    if raw.lower() == "viz":
        return Mode.VIZ
    raise ConfigError(f"invalid mode {raw} (must be one of topo, viz)")


def build_parser():
    parser = argparse.ArgumentParser(description="Порядок сборки и граф зависимостей пакетов (пути к package.json читаются из stdin).")
    parser.add_argument("entrypoint", nargs="?", help="Пакет, от которого строится подграф зависимых пакетов")
    parser.add_argument("mode", nargs="?", choices=MODES, help="topo, viz или all (по умолчанию оба вывода)")
    parser.add_argument("--debug", action="store_true", help="Отладочный вывод в stderr")
    parser.add_argument("--config", "-c", help="Путь к XML конфигу")
    parser.add_argument("--image", "-o", help="Дополнительно нарисовать подграф через Graphviz в этот файл")
    parser.add_argument("--format", "-f", dest="image_format", help="Формат изображения Graphviz (png, svg, pdf...)")
    return parser


def configure_logging(debug):
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )


def render_image(graph, output_file, image_format):
    dot = graph.to_graphviz()
    try:
        path = dot.render(output_file, format=image_format, cleanup=True)
    except (graphviz.ExecutableNotFound, graphviz.CalledProcessError) as e:
        raise RenderError(output_file, e) from e
    log.info("Файл визуализации сохранён как %s", path)
    return path


def run(args, cfg, stdin=None):
    entrypoint = args.entrypoint or cfg.get("entrypoint")
    if not entrypoint:
        raise ConfigError("missing entrypoint")
    mode = parse_mode(args.mode or cfg.get("mode"))
    working_directory = cfg.get("working_directory") or os.environ.get("BUILD_WORKING_DIRECTORY")
    image = args.image or cfg.get("image")
    image_format = args.image_format or cfg.get("image_format") or "png"

    manifests = load_manifests(read_paths(stdin), working_directory)
    graph = build_graph(manifests)
    log.debug("full graph: %r", graph)

    graph = dependents_subgraph(graph, entrypoint)
    log.debug("subgraph for %s: %r", entrypoint, graph)

    outputs = []
    if mode & Mode.TOPO:
        outputs.append("\n".join(graph.topo_sort()) + "\n")
    if mode & Mode.VIZ:
        outputs.append(graph.render())
    if image:
        render_image(graph, image, image_format)

    for out in outputs:
        sys.stdout.write(out)
    return 0


def main(argv=None, stdin=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    try:
        cfg = load_config(args.config) if args.config else {}
        if is_true(cfg.get("debug")):
            logging.getLogger().setLevel(logging.DEBUG)
        return run(args, cfg, stdin)
    except DepvisError as e:
        log.error("%s", e)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
