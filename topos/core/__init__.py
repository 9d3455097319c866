"""
Core: ошибки, логирование, значения и алгебра множеств.

Модуль не зависит от number_theory; number_theory строится поверх него.
"""
