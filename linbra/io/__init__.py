from ._yaml import dump_yaml, load_yaml
from ._codec import encode_scalars, decode_scalars, dtype_name
