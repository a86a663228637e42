from .matrix import Matrix
from .sized import Matrix2, Matrix3, Matrix4
