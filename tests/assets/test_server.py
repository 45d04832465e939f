import logging

import pytest

from finch.assets.errors import IndexOutOfRange, MissingFile, UnsupportedAsset
from finch.assets.handle import AssetHandle
from finch.assets.server import AssetServer
from finch.assets.settings import AssetServerSettings
from finch.assets.types import AudioClip, MeshRecord
from tests.conftest import PCM_STEREO_16, chunk, riff

TRIANGLE = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0 0\nvn 0 0 1\nf 1/1/1 2/1/1 3/1/1\n"


def test_asset_server_async_load(tmp_path):
    f = tmp_path / "test_async.obj"
    f.write_text(TRIANGLE)

    server = AssetServer(asset_root=tmp_path)

    handle = server.load("test_async.obj")

    assert isinstance(handle, AssetHandle)
    assert handle.path == "test_async.obj"

    server.shutdown(wait=True)

    loaded_ids = server.update()

    assert handle.id in loaded_ids
    assert handle.id in server.registry

    loaded_data = server.registry.get(handle.id)
    assert isinstance(loaded_data, MeshRecord)
    assert loaded_data.vertex_count == 3


def test_asset_server_caching(tmp_path):
    f = tmp_path / "cached_file.obj"
    f.write_text(TRIANGLE)

    server = AssetServer(asset_root=tmp_path)

    h1 = server.load("cached_file.obj")
    h2 = server.load("cached_file.obj")

    assert h1 == h2
    assert h1.id == h2.id
    server.shutdown()


def test_asset_server_records_failures(tmp_path, caplog):
    (tmp_path / "broken.obj").write_text("f 1/1/1 1/1/1 1/1/1\n")

    server = AssetServer(asset_root=tmp_path)
    broken = server.load("broken.obj")
    missing = server.load("nope.wav")
    server.shutdown(wait=True)

    with caplog.at_level(logging.ERROR, logger="finch"):
        loaded_ids = server.update()

    assert loaded_ids == []
    assert broken.id not in server.registry
    assert isinstance(server.failures[broken.id], IndexOutOfRange)
    assert isinstance(server.failures[missing.id], MissingFile)
    assert "broken.obj" in caplog.text


def test_asset_server_unsupported_extension(tmp_path):
    (tmp_path / "image.png").write_bytes(b"\x89PNG")

    server = AssetServer(asset_root=tmp_path)
    handle = server.load("image.png")
    server.shutdown(wait=True)
    server.update()

    assert isinstance(server.failures[handle.id], UnsupportedAsset)


def test_asset_server_unload_releases_clip(tmp_path):
    body = chunk(b"fmt ", PCM_STEREO_16) + chunk(b"data", b"\x00" * 8)
    (tmp_path / "beep.wav").write_bytes(riff(body))

    server = AssetServer(asset_root=tmp_path, settings=AssetServerSettings(max_workers=1))
    handle = server.load("beep.wav")
    server.shutdown(wait=True)
    server.update()

    clip = server.registry.get(handle.id)
    assert isinstance(clip, AudioClip)

    server.unload(handle)

    assert clip.released
    assert handle.id not in server.registry


def test_asset_server_logs_summaries(tmp_path, caplog):
    (tmp_path / "tri.obj").write_text(TRIANGLE)

    server = AssetServer(asset_root=tmp_path)
    server.load("tri.obj")
    server.shutdown(wait=True)

    with caplog.at_level(logging.DEBUG, logger="finch"):
        server.update()

    assert "[tri.obj] Load Complete" in caplog.text
    assert "3 vertices (1 triangles)" in caplog.text


def test_settings_reject_zero_workers():
    with pytest.raises(ValueError):
        AssetServerSettings(max_workers=0)


def test_asset_server_drops_result_unloaded_mid_decode(tmp_path):
    body = chunk(b"fmt ", PCM_STEREO_16) + chunk(b"data", b"\x00" * 8)
    (tmp_path / "late.wav").write_bytes(riff(body))

    server = AssetServer(asset_root=tmp_path)
    handle = server.load("late.wav")
    server.shutdown(wait=True)

    # Decode has finished but update() has not collected it yet.
    _, clip, _ = server._done_queue.queue[0]
    server.unload(handle)

    assert server.update() == []
    assert handle.id not in server.registry
    assert isinstance(clip, AudioClip)
    assert clip.released
