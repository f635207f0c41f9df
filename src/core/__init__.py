"""
Core: математика доходности, domain модели и JSON контракты.

Не зависит от внешних систем (persistence, UI, import/export, sync):
все входы передаются явно, wall clock не читается.
"""
