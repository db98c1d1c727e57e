import tkinter as tk
from tkinter import ttk
from ..config import STRATEGIES

class OptionsSection:
    def __init__(self,parent,vars_obj):
        self.vars=vars_obj
        frame=ttk.LabelFrame(parent,text='检测参数')
        self.frame=frame
        self._build()

    def _build(self):
        v=self.vars; f=self.frame
        ttk.Label(f,text='扩展名').grid(row=0,column=0,sticky='e')
        ttk.Entry(f,textvariable=v['extensions'],width=18).grid(row=0,column=1,sticky='w',padx=(0,6))
        ttk.Label(f,text='策略').grid(row=0,column=2,sticky='e')
        ttk.Combobox(f,textvariable=v['strategy'],values=list(STRATEGIES),width=11,state='readonly').grid(row=0,column=3,sticky='w',padx=(0,6))
        ttk.Label(f,text='来源').grid(row=0,column=4,sticky='e')
        ttk.Combobox(f,textvariable=v['tld'],values=['cn','tw','hk','jp','kr',''],width=5).grid(row=0,column=5,sticky='w')
        ttk.Label(f,text='最小置信度').grid(row=1,column=0,sticky='e',pady=(4,0))
        ttk.Spinbox(f,from_=0.0,to=1.0,increment=0.05,textvariable=v['min_confidence'],width=6).grid(row=1,column=1,sticky='w',pady=(4,0))
        ttk.Label(f,text='最少字节对').grid(row=1,column=2,sticky='e',pady=(4,0))
        ttk.Spinbox(f,from_=0,to=9999,textvariable=v['min_count'],width=6).grid(row=1,column=3,sticky='w',pady=(4,0))
        ttk.Label(f,text='最短连续').grid(row=1,column=4,sticky='e',pady=(4,0))
        ttk.Spinbox(f,from_=0,to=9999,textvariable=v['min_run'],width=6).grid(row=1,column=5,sticky='w',pady=(4,0))
        for i,(txt,key) in enumerate([('仅扫描','scan_only'),('备份.bak','backup'),('显示详情','verbose')]):
            ttk.Checkbutton(f,text=txt,variable=v[key]).grid(row=2,column=i*2,columnspan=2,sticky='w',pady=(4,0))

    def widget(self): return self.frame
