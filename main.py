import sys
import json
import argparse
import traceback

from config import load_settings, get_text
from squaremap.errors import InvalidCanvasError, InvalidWeightError, LayoutError
from squaremap.tree_content import TreeContent, layout_tree, node_depths


def exception_hook(exctype, value, tb):
    """全局未捕获异常句柄"""
    err_msg = "".join(traceback.format_exception(exctype, value, tb))
    print(err_msg, file=sys.stderr)
    sys.exit(1)


def parse_items(raw):
    """
    支持两种输入：
    {"名称": 权重, ...} 或 [{"name": ..., "weight": ..., "children": [...]}, ...]
    """
    if isinstance(raw, dict):
        return [TreeContent(str(name), float(weight)) for name, weight in raw.items()]
    if isinstance(raw, list):
        return [TreeContent.from_dict(d) for d in raw]
    raise ValueError("expected a JSON object or list at top level")


def read_items(path):
    if path == '-':
        return parse_items(json.load(sys.stdin))
    with open(path, 'r', encoding='utf-8') as f:
        return parse_items(json.load(f))


def build_parser():
    parser = argparse.ArgumentParser(prog="squaremap", description="Squarified treemap layout")
    parser.add_argument("items", help="JSON file with items and weights, '-' for stdin")
    parser.add_argument("--x", type=float, default=0.0)
    parser.add_argument("--y", type=float, default=0.0)
    parser.add_argument("--width", type=float, default=None)
    parser.add_argument("--height", type=float, default=None)
    parser.add_argument("--lang", choices=["zh", "en"], default=None)
    parser.add_argument("--config", default=None, help="path to a squaremap.json settings file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    lang = args.lang or settings['lang']
    width = args.width if args.width is not None else settings['canvas_width']
    height = args.height if args.height is not None else settings['canvas_height']

    try:
        contents = read_items(args.items)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        print(get_text('read_error', lang).format(path=args.items, error=e), file=sys.stderr)
        return 1

    try:
        rectangles = layout_tree(contents, args.x, args.y, width, height, settings)
    except InvalidCanvasError:
        print(get_text('invalid_canvas', lang).format(width=width, height=height), file=sys.stderr)
        return 2
    except InvalidWeightError as e:
        print(get_text('invalid_weight', lang).format(error=e), file=sys.stderr)
        return 2
    except LayoutError as e:
        print(get_text('layout_error', lang).format(error=e), file=sys.stderr)
        return 2

    if not rectangles:
        print(get_text('empty_layout', lang), file=sys.stderr)
        return 0

    depths = node_depths(contents)
    digits = settings.get('precision', 4)
    for rect in rectangles:
        row = {
            'name': rect.data.name,
            'depth': depths.get(id(rect.data), 0),
            'x': round(rect.x, digits),
            'y': round(rect.y, digits),
            'width': round(rect.width, digits),
            'height': round(rect.height, digits),
        }
        # 输入里带的附加数据原样输出
        if rect.data.data:
            row['data'] = rect.data.data
        print(json.dumps(row, ensure_ascii=False))

    top_area = sum(r.area for r in rectangles if depths.get(id(r.data), 0) == 0)
    print(get_text('summary', lang).format(count=len(rectangles), area=top_area), file=sys.stderr)
    return 0


def run():
    sys.excepthook = exception_hook
    sys.exit(main())


if __name__ == "__main__":
    run()
