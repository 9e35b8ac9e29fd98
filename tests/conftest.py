"""Test configuration for databinder."""

import tempfile
import zipfile
from pathlib import Path

import pytest

DATA_BINDING_LAYOUT = """<?xml version="1.0" encoding="utf-8"?>
<layout xmlns:android="http://schemas.android.com/apk/res/android">
    <data>
        <import type="android.view.View"/>
        <variable name="user" type="com.example.app.User"/>
    </data>
    <LinearLayout
        android:layout_width="match_parent"
        android:layout_height="match_parent">
        <TextView
            android:id="@+id/name"
            android:layout_width="wrap_content"
            android:layout_height="wrap_content"
            android:text="@{user.name}"/>
    </LinearLayout>
</layout>
"""

VIEW_BINDING_LAYOUT = """<?xml version="1.0" encoding="utf-8"?>
<FrameLayout xmlns:android="http://schemas.android.com/apk/res/android"
    android:layout_width="match_parent"
    android:layout_height="wrap_content"/>
"""

STRINGS = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <string name="app_name">Example</string>
</resources>
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def res_dir(temp_dir):
    """Create a merged resources folder.

    Holds one data binding layout, one plain layout and a values file.

    Returns:
        Path: The resources root.
    """
    res = temp_dir / "res"
    (res / "layout").mkdir(parents=True)
    (res / "values").mkdir()
    (res / "layout" / "activity_main.xml").write_text(DATA_BINDING_LAYOUT)
    (res / "layout" / "item_row.xml").write_text(VIEW_BINDING_LAYOUT)
    (res / "values" / "strings.xml").write_text(STRINGS)
    return res


@pytest.fixture
def res_zip(temp_dir, res_dir):
    """Zip the resources folder.

    Returns:
        Path: A zip whose entries are relative to the resources root.
    """
    archive = temp_dir / "res.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in sorted(res_dir.rglob("*")):
            if path.is_file():
                zf.write(path, path.relative_to(res_dir).as_posix())
    return archive


@pytest.fixture
def config(temp_dir):
    """Configuration whose temporary directories live under the test directory."""
    from databinder.core.config import Config, WorkspaceConfig

    return Config(workspace=WorkspaceConfig(temp_root=temp_dir / "tmp"))


@pytest.fixture
def engine():
    """The bundled reference engine."""
    from databinder.engine.reference import ReferenceEngine

    return ReferenceEngine()
