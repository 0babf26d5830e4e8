from camera import Camera
from surfaces import Sphere
from vector import Vector


def default_scene():
    """A small sphere resting on a very large one acting as the ground."""
    return (
        Sphere(Vector(0.0, 0.0, 1.0), 0.5),
        Sphere(Vector(0.0, 100.6, 1.0), 100.0),
    )


def parse_scene_file(file_path):
    """
    Parse a scene file and return (camera, surfaces).

    camera is None when the file has no "cam" line; surfaces is a tuple in
    file order.
    """
    camera = None
    surfaces = []

    with open(file_path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            obj_type = parts[0]
            try:
                params = [float(p) for p in parts[1:]]
            except ValueError:
                raise ValueError("Line {}: non-numeric parameter in {!r}".format(line_number, line))

            if obj_type == "cam":
                if len(params) not in (3, 6):
                    raise ValueError("Line {}: cam expects 3 or 6 parameters".format(line_number))
                location = Vector(*params[3:6]) if len(params) == 6 else Vector()
                camera = Camera(params[0], params[1], params[2], location)
            elif obj_type == "sph":
                if len(params) != 4:
                    raise ValueError("Line {}: sph expects 4 parameters".format(line_number))
                surfaces.append(Sphere(Vector(*params[:3]), params[3]))
            else:
                raise ValueError("Unknown object type: {}".format(obj_type))

    return camera, tuple(surfaces)
