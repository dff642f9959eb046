# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.
# Sans cet import, les FK comme students.group_id → groups.id échouent
# avec NoReferencedTableError si faculty.py n'est pas chargé avant student.py.

from app.models.user import User, Role, UserRole  # noqa: F401  (doit précéder student)
from app.models.faculty import Faculty, Group  # noqa: F401
from app.models.student import Student  # noqa: F401
from app.models.subject import Subject, Grade  # noqa: F401
from app.models.schedule import Schedule  # noqa: F401
from app.models.attendance import Attendance  # noqa: F401
