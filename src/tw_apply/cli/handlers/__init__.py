from .transform import handle_transform, _transform_single_file, _print_batch_summary
from .paths import handle_stylesheet_path

__all__ = [
  "_print_batch_summary",
  "_transform_single_file",
  "handle_stylesheet_path",
  "handle_transform",
]
