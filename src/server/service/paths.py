# -*- coding: utf-8 -*-
"""
统一的路径管理服务。

文件功能:
    - 为面板后端提供前端静态资源目录的查找。

公开接口:
    - get_server_dir(): 获取后端源码根目录 (src/server)。
    - get_frontend_dist_dir(): 获取前端构建产物目录。
"""

from pathlib import Path


def get_server_dir() -> Path:
    """获取后端源码根目录。"""
    # __file__ is src/server/service/paths.py
    return Path(__file__).parent.parent


def get_frontend_dist_dir() -> Path:
    """获取前端构建产物目录。

    优先使用当前工作目录下的 dist（与打包后的启动方式一致），
    不存在时回退到 src/server/dist。
    """
    cwd_dist = Path.cwd() / "dist"
    if cwd_dist.exists():
        return cwd_dist
    return get_server_dir() / "dist"
