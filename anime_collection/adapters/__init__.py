"""
Adaptateurs d'infrastructure : clients HTTP des services externes et CLI.
"""
