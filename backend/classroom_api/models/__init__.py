# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles
# (users ↔ media, classrooms → media, lectures → lectures).

from classroom_api.models.user import User  # noqa: F401
from classroom_api.models.media import Media  # noqa: F401
from classroom_api.models.classroom import Classroom, ClassroomStudent  # noqa: F401
from classroom_api.models.join_request import JoinRequest  # noqa: F401
from classroom_api.models.lecture import Lecture  # noqa: F401
from classroom_api.models.auth import OtpCode, RefreshToken  # noqa: F401
