"""Pipeline services.

- **template_parser** -- ``template.txt`` -> ``ParsedTemplate``
- **directory_scanner** -- submission directory -> candidate photo names
- **title_cache** -- titles already published, loaded once per run
- **context** -- ``PublishContext`` bundling store, cache and policy
- **publisher** -- photo upload plus entry create/publish for one submission
- **submission_walker** -- runs the publisher over every submission
- **admin_service** -- schema inspection and two-phase bulk delete
"""

from mural_publisher.services.admin_service import AdminService
from mural_publisher.services.context import PublishContext
from mural_publisher.services.directory_scanner import scan_submission_directory
from mural_publisher.services.publisher import MuralPublisher
from mural_publisher.services.submission_walker import SubmissionWalker
from mural_publisher.services.template_parser import parse_template_file, parse_template_text
from mural_publisher.services.title_cache import TitleCache

__all__ = [
    "AdminService",
    "MuralPublisher",
    "PublishContext",
    "SubmissionWalker",
    "TitleCache",
    "parse_template_file",
    "parse_template_text",
    "scan_submission_directory",
]
