from .vector import Vector
from .sized import Vector2, Vector3, Vector4
