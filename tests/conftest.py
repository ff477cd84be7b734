from __future__ import annotations

import pytest

from modlistdiff import ModEntry, ModList, ModListKind, ModSource

PRESET_HTML = """<?xml version="1.0" encoding="utf-8"?>
<html>
  <!--Created by Arma 3 Launcher: https://arma3.com-->
  <head>
    <meta name="arma:Type" content="preset" />
    <meta name="arma:PresetName" content="Ops Night &amp; Day" />
    <meta name="generator" content="Arma 3 Launcher - https://arma3.com" />
    <title>Arma 3</title>
  </head>
  <body>
    <h1>Arma 3  - Preset <strong>Ops Night &amp; Day</strong></h1>
    <div class="mod-list">
      <table>
        <tr data-type="ModContainer">
          <td data-type="DisplayName">CBA_A3</td>
          <td>
            <span class="from-steam">Steam</span>
          </td>
          <td>
            <a href="https://steamcommunity.com/sharedfiles/filedetails/?id=450814997" data-type="Link">https://steamcommunity.com/sharedfiles/filedetails/?id=450814997</a>
          </td>
        </tr>
        <tr data-type="ModContainer" class="odd">
          <td data-type="DisplayName">Add &amp; Remove   Map
            Labels</td>
          <td>
            <span class="from-steam">Steam</span>
          </td>
          <td>
            <a data-type='Link' href='https://steamcommunity.com/sharedfiles/filedetails/?id=1234&amp;searchtext='>link</a>
          </td>
        </tr>
        <tr data-type="ModContainer">
          <td data-type="DisplayName"><b>ACE</b> &#51; &#x41;dvanced</td>
          <td>
            <span class="from-steam">Steam</span>
          </td>
          <td>
            <a href="https://steamcommunity.com/sharedfiles/filedetails/?id=463939057" data-type="Link">link</a>
          </td>
        </tr>
        <tr data-type="ModContainer">
          <td data-type="DisplayName">   </td>
          <td><span class="from-local">Local</span></td>
          <td></td>
        </tr>
        <tr data-type="ModContainer">
          <td data-type="DisplayName">Client Tweaks &copy;</td>
          <td><span class="from-local">Local</span></td>
          <td></td>
        </tr>
      </table>
    </div>
  </body>
</html>
"""

LIST_HTML = """<?xml version="1.0" encoding="utf-8"?>
<html>
  <head>
    <meta name="arma:Type" content="list" />
  </head>
  <body>
    <table>
      <tr data-type="ModContainer">
        <td data-type="DisplayName">Local Utility Pack</td>
        <td><span class="from-local">Local</span></td>
        <td></td>
      </tr>
    </table>
  </body>
</html>
"""


def steam_entry(name: str, steam_id: str) -> ModEntry:
    return ModEntry(
        display_name=name,
        external_id=steam_id,
        external_url=f"https://steamcommunity.com/sharedfiles/filedetails/?id={steam_id}",
        source=ModSource.EXTERNAL,
    )


def local_entry(name: str) -> ModEntry:
    return ModEntry(display_name=name, source=ModSource.LOCAL)


def make_list(*entries: ModEntry, name: str | None = None, kind: ModListKind = ModListKind.LIST) -> ModList:
    return ModList(kind=kind, entries=tuple(entries), name=name)


@pytest.fixture
def preset_html() -> str:
    return PRESET_HTML


@pytest.fixture
def list_html() -> str:
    return LIST_HTML
