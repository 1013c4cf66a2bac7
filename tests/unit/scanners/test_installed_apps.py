"""Unit tests for the installed application index."""

import plistlib
from pathlib import Path

from opencleaner.scanners.installed_apps import InstalledApps, name_variants, read_info_plist


def make_app(app_dir: Path, name: str, info: dict[str, object] | None) -> Path:
    """Create a minimal .app bundle with an optional Info.plist."""
    bundle = app_dir / f"{name}.app"
    contents = bundle / "Contents"
    contents.mkdir(parents=True)
    if info is not None:
        with open(contents / "Info.plist", "wb") as f:
            plistlib.dump(info, f)
    return bundle


class TestNameVariants:
    """Tests for name_variants."""

    def test_derives_variants(self) -> None:
        """Vendor, last component casings, words and bundle name are included."""
        variants = name_variants("iTerm Nightly", "com.googlecode.iterm2", "iTerm2")

        assert "com.googlecode.iterm2" in variants
        assert "iTerm Nightly" in variants
        assert "Googlecode" in variants
        assert {"iterm2", "Iterm2", "ITERM2"} <= variants
        assert {"iTerm", "Nightly"} <= variants

    def test_bundle_name_optional(self) -> None:
        """A missing bundle name adds nothing and empty strings are dropped."""
        variants = name_variants("Tool", "com.example.", None)
        assert "" not in variants
        assert "Example" in variants


class TestReadInfoPlist:
    """Tests for read_info_plist."""

    def test_reads_plist(self, tmp_path: Path) -> None:
        """A valid Info.plist is parsed into a dict."""
        bundle = make_app(tmp_path, "App", {"CFBundleIdentifier": "com.example.App"})
        assert read_info_plist(bundle) == {"CFBundleIdentifier": "com.example.App"}

    def test_missing_or_corrupt(self, tmp_path: Path) -> None:
        """Missing or unparsable plists yield None."""
        missing = make_app(tmp_path, "Missing", None)
        corrupt = make_app(tmp_path, "Corrupt", None)
        (corrupt / "Contents" / "Info.plist").write_text("not a plist")

        assert read_info_plist(missing) is None
        assert read_info_plist(corrupt) is None

    def test_truncated_xml(self, tmp_path: Path) -> None:
        """A truncated XML plist yields None instead of a parser error."""
        bundle = make_app(tmp_path, "Truncated", None)
        (bundle / "Contents" / "Info.plist").write_text(
            '<?xml version="1.0" encoding="UTF-8"?><plist><dict><key>CFBundleIdentifier</key>'
        )

        assert read_info_plist(bundle) is None


class TestInstalledApps:
    """Tests for InstalledApps."""

    def test_collects_identifiers(self, tmp_path: Path) -> None:
        """Identifiers are gathered from every application directory."""
        system = tmp_path / "Applications"
        user = tmp_path / "home" / "Applications"
        make_app(system, "Slack", {"CFBundleIdentifier": "com.tinyspeck.slackmacgap"})
        make_app(user, "Notes Plus", {"CFBundleIdentifier": "org.example.notes", "CFBundleName": "NP"})
        make_app(system, "Broken", {"CFBundleName": "Broken"})
        (system / "README.txt").write_text("not an app")

        identifiers = InstalledApps(app_dirs=(system, user, tmp_path / "missing")).bundle_identifiers()

        assert "com.tinyspeck.slackmacgap" in identifiers
        assert "Slack" in identifiers
        assert "org.example.notes" in identifiers
        assert "NP" in identifiers
        assert "Broken" not in identifiers

    def test_truncated_plist_does_not_hide_other_apps(self, tmp_path: Path) -> None:
        """A broken bundle is skipped and its neighbours are still indexed."""
        apps = tmp_path / "Applications"
        make_app(apps, "Good", {"CFBundleIdentifier": "com.example.Good"})
        broken = make_app(apps, "Broken", None)
        (broken / "Contents" / "Info.plist").write_text(
            '<?xml version="1.0" encoding="UTF-8"?><plist><dict><key>CFBundleIdentifier</key>'
        )

        identifiers = InstalledApps(app_dirs=(apps,)).bundle_identifiers()

        assert "com.example.Good" in identifiers
