from urlshortener.deploy.template import build_template, hosting_plan_name, web_app_name, unique_suffix, render_template


__all__ = [
    'build_template',
    'hosting_plan_name',
    'web_app_name',
    'unique_suffix',
    'render_template',
]
