import os
import json
import logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# 多语言支持
# ---------------------------------------------------------
I18N = {
    'zh': {
        'invalid_canvas': "画布尺寸无效：{width} x {height}",
        'invalid_weight': "权重无效：{error}",
        'layout_error': "布局失败：{error}",
        'read_error': "无法读取输入文件 {path}：{error}",
        'empty_layout': "没有可布局的内容",
        'summary': "共 {count} 个矩形，覆盖面积 {area:.2f}",
    },
    'en': {
        'invalid_canvas': "Invalid canvas size: {width} x {height}",
        'invalid_weight': "Invalid weight: {error}",
        'layout_error': "Layout failed: {error}",
        'read_error': "Cannot read input file {path}: {error}",
        'empty_layout': "Nothing to lay out",
        'summary': "{count} rectangle(s), covered area {area:.2f}",
    }
}

# ---------------------------------------------------------
# 默认配置
# ---------------------------------------------------------
DEFAULT_SETTINGS = {
    'canvas_width': 300.0,
    'canvas_height': 200.0,
    'group_header_height': 20,
    'group_header_min_height': 40,
    'group_padding': 2,
    'min_inner_size': 5,
    'lang': 'zh',
    'precision': 4
}

CONFIG_FILE = "squaremap.json"
DOCS_APP_DIR = os.path.join(os.path.expanduser("~"), "Documents", "Squaremap")
DOCS_CONFIG_FILE = os.path.join(DOCS_APP_DIR, "squaremap.json")


def load_settings(path=None):
    settings = DEFAULT_SETTINGS.copy()

    # 显式路径优先，其次文档目录，最后程序目录
    actual_path = None
    for candidate in ([path] if path else [DOCS_CONFIG_FILE, CONFIG_FILE]):
        if os.path.exists(candidate):
            actual_path = candidate
            break

    if actual_path:
        try:
            with open(actual_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                settings.update(loaded)
            else:
                logger.warning("Ignoring config %s: top level is not an object", actual_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load config %s: %s", actual_path, e)

    # 最终确保 lang 合法
    if settings.get('lang') not in I18N:
        settings['lang'] = 'zh'

    return settings


def save_settings(settings, path=None):
    # 先加载现有配置再合并，确保写出的配置是完整的
    full_settings = load_settings(path)
    full_settings.update(settings)

    target = path or DOCS_CONFIG_FILE
    directory = os.path.dirname(target)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)
    with open(target, 'w', encoding='utf-8') as f:
        json.dump(full_settings, f, indent=4, ensure_ascii=False)
    return full_settings


def get_text(key, lang='zh'):
    return I18N.get(lang, I18N['zh']).get(key, key)
