from finch.assets.errors import (
    AssetError,
    DecodeError,
    FormatTooLarge,
    IndexOutOfRange,
    MalformedContainer,
    MalformedDirective,
    MalformedFace,
    MissingFile,
    ReleasedClip,
    TruncatedData,
    UnsupportedAsset,
    UnsupportedFaceArity,
    UnsupportedSampleFormat,
)
from finch.assets.handle import AssetHandle, AssetId
from finch.assets.importers.material import MtlImporter, load_mtl
from finch.assets.importers.mesh import ObjImporter, load_obj
from finch.assets.importers.wave import WaveImporter, load_wave
from finch.assets.server import AssetServer
from finch.assets.settings import AssetServerSettings
from finch.assets.types import (
    VERTEX_LAYOUT,
    AudioClip,
    AudioStreamFormat,
    MaterialDescriptor,
    MeshRecord,
    Normal3D,
    Position3D,
    TexCoord2D,
    Vertex,
    VertexLayout,
)

__all__ = [
    "AssetServer",
    "AssetServerSettings",
    "AssetHandle",
    "AssetId",
    "load_wave",
    "load_obj",
    "load_mtl",
    "WaveImporter",
    "ObjImporter",
    "MtlImporter",
    "AudioClip",
    "AudioStreamFormat",
    "MaterialDescriptor",
    "MeshRecord",
    "Normal3D",
    "Position3D",
    "TexCoord2D",
    "Vertex",
    "VertexLayout",
    "VERTEX_LAYOUT",
    "AssetError",
    "DecodeError",
    "MissingFile",
    "MalformedContainer",
    "FormatTooLarge",
    "TruncatedData",
    "MalformedFace",
    "IndexOutOfRange",
    "UnsupportedFaceArity",
    "MalformedDirective",
    "UnsupportedSampleFormat",
    "ReleasedClip",
    "UnsupportedAsset",
]
