#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Residue Data Model

Defines the Residue class: a named, contiguous range of atom indices.
"""


class Residue:
    """
    Residue data class.

    Attributes:
        res_name (str): Residue name
        res_seq (int): Residue sequence number from the input file
        chain_id (str): Chain identifier
        i_code (str): Insertion code
        start (int): Index of the first atom of the residue
        stop (int): One past the index of the last atom of the residue
    """
    def __init__(self, res_name: str, res_seq: int, chain_id: str, i_code: str = ' ',
                 start: int = 0, stop: int = 0):
        self.res_name = res_name
        self.res_seq = res_seq
        self.chain_id = chain_id
        self.i_code = i_code
        self.start = start
        self.stop = stop

    @property
    def atom_count(self) -> int:
        return self.stop - self.start

    def __repr__(self) -> str:
        """String representation of the residue"""
        return f"Residue(res_name={self.res_name}, res_seq={self.res_seq}, chain_id={self.chain_id}, atoms={self.start}-{self.stop})"
