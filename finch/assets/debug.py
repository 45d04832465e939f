# finch/assets/debug.py
from __future__ import annotations

from typing import Any, List

from finch.assets.types import AudioClip, MaterialDescriptor, MeshRecord


def describe_mesh(mesh: MeshRecord, label: str = "") -> List[str]:
    """
    Summary of a decoded mesh, one string per line.

    Meant for logs when chasing scale, winding or UV issues.
    """
    lines = [
        f"[{label}] Load Complete" if label else "Load Complete",
        f"  > Geometry:   {mesh.vertex_count} vertices "
        f"({mesh.triangle_count} triangles)",
        f"  > Stride:     {mesh.vertex_layout.stride_bytes} bytes "
        f"({mesh.vertex_layout.format})",
    ]

    bounds = mesh.bounds()
    if bounds is not None:
        (min_x, min_y, min_z), (max_x, max_y, max_z) = bounds
        lines.append(f"  > Bounds X:   {min_x:.3f} to {max_x:.3f}")
        lines.append(f"  > Bounds Y:   {min_y:.3f} to {max_y:.3f}")
        lines.append(f"  > Bounds Z:   {min_z:.3f} to {max_z:.3f}")

    lines.append(f"  > Texture:    {mesh.material.texture_path or '<none>'}")

    # First triangle, as emitted (already reversed)
    for i, vert in enumerate(mesh.vertices[:3]):
        p_vals = [f"{c:.2f}" for c in vert.position]
        uv_vals = [f"{c:.2f}" for c in vert.texcoord]
        n_vals = [f"{c:.2f}" for c in vert.normal]
        lines.append(f"    Vert {i}: Pos={p_vals}  UV={uv_vals}  Norm={n_vals}")

    return lines


def describe_clip(clip: AudioClip, label: str = "") -> List[str]:
    fmt = clip.format
    head = f"[{label}] Load Complete" if label else "Load Complete"
    if clip.released:
        return [head, "  > <released>"]

    return [
        head,
        f"  > Format:     tag={fmt.format_tag} "
        f"{fmt.channels}ch {fmt.samples_per_sec}Hz {fmt.bits_per_sample}-bit",
        f"  > Block:      {fmt.block_align} bytes, "
        f"{fmt.avg_bytes_per_sec} bytes/s",
        f"  > Data:       {clip.size} bytes ({clip.duration:.3f}s)",
    ]


def describe_asset(data: Any, label: str = "") -> List[str]:
    if isinstance(data, MeshRecord):
        return describe_mesh(data, label)
    if isinstance(data, AudioClip):
        return describe_clip(data, label)
    if isinstance(data, MaterialDescriptor):
        return [
            f"[{label}] Load Complete" if label else "Load Complete",
            f"  > Texture:    {data.texture_path or '<none>'}",
        ]
    return [f"[{label}] {type(data).__name__}"]
