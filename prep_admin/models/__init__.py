# prep_admin/models/__init__.py
# importing every model registers its table on Base.metadata
from prep_admin.models.subject import Subject, SubjectSection, Lesson  # noqa
from prep_admin.models.question import Question  # noqa
from prep_admin.models.tag import Tag  # noqa
from prep_admin.models.exam import Exam, ExamQuestion  # noqa
from prep_admin.models.news import NewsArticle, Announcement  # noqa
from prep_admin.models.activation_code import ActivationCode  # noqa
from prep_admin.models.profile import Profile  # noqa
