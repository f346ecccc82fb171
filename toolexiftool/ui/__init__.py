"""
Presentation: text formatting helpers and the tkinter window
"""
