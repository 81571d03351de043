"""HDF5 export and import of generated particle buffers."""

import h5py
import numpy as np
from pathlib import Path
from datetime import datetime
from typing import Dict, Mapping, Optional, Sequence

from ..config import EXPORT_DIRECTORY
from ..initialization.generators import GalaxyBuffers, ParticleBuffer
from ..initialization.layout import GalaxyInstance

LAYERS = ('primary', 'bulge', 'dust')


def generate_export_filename() -> str:
    """Generate an export filename with timestamp in YYYYMMDD-HHMMSS format."""
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return f"galaxies_{timestamp}.h5"


def ensure_export_directory(base_path: Optional[Path] = None) -> Path:
    """Ensure the export directory exists and return its path."""
    if base_path is None:
        export_dir = Path(EXPORT_DIRECTORY)
    else:
        export_dir = base_path / EXPORT_DIRECTORY

    export_dir.mkdir(parents=True, exist_ok=True)
    return export_dir


def save_buffers(
    filepath: Path,
    instances: Sequence[GalaxyInstance],
    buffers: Mapping[str, GalaxyBuffers],
) -> str:
    """
    Save generated buffers to an HDF5 file.

    Layout: one group per galaxy id, holding a subgroup per layer with
    ``positions`` and ``colors`` datasets and a ``radius`` attribute.
    Galaxy attributes record the catalog metadata needed to reproduce them.

    Args:
        filepath: Path to save the file
        instances: Galaxies to save, in catalog order
        buffers: Generated buffers keyed by galaxy id

    Returns:
        Path to the saved file as a string
    """
    with h5py.File(filepath, 'w') as f:
        galaxies_grp = f.create_group('galaxies')

        for instance in instances:
            galaxy_grp = galaxies_grp.create_group(instance.id)
            galaxy_grp.attrs['name'] = instance.descriptor.name
            galaxy_grp.attrs['type'] = instance.type
            galaxy_grp.attrs['index'] = instance.index
            galaxy_grp.attrs['size_light_years'] = instance.size_light_years
            galaxy_grp.attrs['color_scheme'] = instance.descriptor.color_scheme
            galaxy_grp.attrs['position'] = np.array(instance.position, dtype='float64')

            galaxy_buffers = buffers[instance.id]
            for layer in LAYERS:
                buffer: ParticleBuffer = getattr(galaxy_buffers, layer)
                layer_grp = galaxy_grp.create_group(layer)
                layer_grp.create_dataset('positions', data=buffer.positions, dtype='float32')
                layer_grp.create_dataset('colors', data=buffer.colors, dtype='float32')
                layer_grp.attrs['radius'] = buffer.radius

        # Add metadata attributes
        f.attrs['version'] = '1.0'
        f.attrs['created'] = datetime.now().isoformat()
        f.attrs.create(
            'order',
            data=[instance.id for instance in instances],
            dtype=h5py.string_dtype(),
        )

    return str(filepath)


def load_buffers(filepath: Path) -> Dict[str, GalaxyBuffers]:
    """
    Load buffers written by :func:`save_buffers`.

    Args:
        filepath: Path to the HDF5 file

    Returns:
        Dictionary of galaxy id to GalaxyBuffers, in saved catalog order
    """
    result = {}
    with h5py.File(filepath, 'r') as f:
        order = [
            name.decode() if isinstance(name, bytes) else str(name)
            for name in f.attrs['order']
        ]
        for galaxy_id in order:
            galaxy_grp = f['galaxies'][galaxy_id]
            layers = {}
            for layer in LAYERS:
                layer_grp = galaxy_grp[layer]
                layers[layer] = ParticleBuffer(
                    positions=layer_grp['positions'][:],
                    colors=layer_grp['colors'][:],
                    radius=float(layer_grp.attrs['radius']),
                )
            result[galaxy_id] = GalaxyBuffers(**layers)

    return result


def export_scene_buffers(scene, base_path: Optional[Path] = None) -> str:
    """
    Export every galaxy's buffers from a scene to a timestamped file.

    Args:
        scene: GalaxyScene whose buffers to export
        base_path: Optional base directory (uses current dir if None)

    Returns:
        Path to the saved file
    """
    export_dir = ensure_export_directory(base_path)
    filepath = export_dir / generate_export_filename()
    return save_buffers(filepath, scene.instances, scene.all_buffers())
