"""
ToggleMaster Mobile - Cross-platform Kivy UI for the flashlight toggle.

This module provides a Kivy-based user interface that works on:
- Desktop (Windows, macOS, Linux), without a torch
- Android, through pyjnius bindings to Camera2, BiometricPrompt,
  BatteryManager and AppWidgetManager

The app lives in ``togglemaster.mobile.app``; it is not imported here so
the platform adapters can be used without opening a Kivy window.
"""
