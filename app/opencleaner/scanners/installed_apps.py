"""Index of installed application identifiers.

Orphan detection compares names found under ~/Library against the set
built here. Besides each app's CFBundleIdentifier, the set is seeded with
loose name variants (vendor token, last identifier component in several
casings, words of the app name, CFBundleName). Broader matching means
fewer false "orphan" flags at the cost of missing some real orphans.
"""

import logging
import plistlib
from pathlib import Path
from xml.parsers.expat import ExpatError

from opencleaner.core.paths import get_application_dirs

logger = logging.getLogger(__name__)

APP_SUFFIX = ".app"


def read_info_plist(app_path: Path) -> dict[str, object] | None:
    """Read an application bundle's Contents/Info.plist.

    Args:
        app_path: Path to the ``.app`` bundle.

    Returns:
        Parsed plist dictionary, or None if missing or unreadable.
    """
    info_path = app_path / "Contents" / "Info.plist"
    try:
        with open(info_path, "rb") as f:
            data = plistlib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, plistlib.InvalidFileException, ExpatError, ValueError) as e:
        logger.debug("Cannot read %s: %s", info_path, e)
        return None

    if not isinstance(data, dict):
        return None
    return data


def name_variants(app_name: str, bundle_id: str, bundle_name: str | None) -> set[str]:
    """Derive the identifiers an installed app may appear under.

    Args:
        app_name: Bundle file name without the ``.app`` suffix.
        bundle_id: The app's CFBundleIdentifier (e.g. ``com.googlecode.iterm2``).
        bundle_name: The app's CFBundleName, if present.

    Returns:
        Set containing the bundle identifier and all derived variants.
    """
    variants = {bundle_id, app_name}

    parts = bundle_id.split(".")
    if len(parts) >= 2:
        # "com.google.Chrome" -> "Google"
        variants.add(parts[1].capitalize())

    last = parts[-1]
    if last:
        variants.add(last)
        variants.add(last.capitalize())
        variants.add(last.upper())
        variants.add(last[:1].upper() + last[1:])

    # "Visual Studio Code" -> "Visual", "Studio", "Code"
    variants.update(app_name.split())

    if bundle_name:
        variants.add(bundle_name)

    variants.discard("")
    return variants


class InstalledApps:
    """Builds the set of identifiers for installed applications.

    Args:
        app_dirs: Directories to search for ``.app`` bundles. Defaults to
            /Applications and ~/Applications.
    """

    def __init__(self, app_dirs: tuple[Path, ...] | None = None) -> None:
        self._app_dirs = app_dirs if app_dirs is not None else get_application_dirs()

    def bundle_identifiers(self) -> set[str]:
        """Collect bundle identifiers and name variants of installed apps.

        Only the top level of each application directory is searched.
        Bundles without a readable Info.plist or without a
        CFBundleIdentifier are ignored.

        Returns:
            Set of identifiers and name variants.
        """
        identifiers: set[str] = set()

        for app_dir in self._app_dirs:
            try:
                entries = sorted(app_dir.iterdir())
            except OSError:
                logger.debug("Cannot list application directory: %s", app_dir)
                continue

            for entry in entries:
                if not entry.name.endswith(APP_SUFFIX):
                    continue

                info = read_info_plist(entry)
                if info is None:
                    continue

                bundle_id = info.get("CFBundleIdentifier")
                if not isinstance(bundle_id, str) or not bundle_id:
                    continue

                bundle_name = info.get("CFBundleName")
                identifiers.update(
                    name_variants(
                        entry.name.removesuffix(APP_SUFFIX),
                        bundle_id,
                        bundle_name if isinstance(bundle_name, str) else None,
                    )
                )

        logger.debug("Indexed %d installed app identifiers", len(identifiers))
        return identifiers
