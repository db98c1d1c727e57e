"""图形界面入口 (gbk2utf8 --gui)
后台线程执行与命令行相同的遍历, 日志行经队列送入 LogView。
"""
import os, threading, queue, tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Optional
from .config import Config
from .utils import ErrorKind, WalkError
from .stages.policy import process_tree
from .ui.log_view import LogView
from .ui.section_options import OptionsSection

class GBKConvertApp:
    def __init__(self, root:tk.Tk, config:Optional[Config]=None):
            self.root = root
            root.title('GBK 转 UTF-8')
            cfg = config or Config()
            # 运行控制
            self.q = queue.Queue()
            self.stop_flag = threading.Event()
            self.worker = None
            # 参数
            self.dir_var        = tk.StringVar(value=os.path.abspath(cfg.target_directory))
            self.ext_var        = tk.StringVar(value=','.join(sorted(cfg.extensions)))
            self.strategy_var   = tk.StringVar(value=cfg.strategy)
            self.tld_var        = tk.StringVar(value=cfg.locale_hint or '')
            self.min_conf_var   = tk.DoubleVar(value=cfg.min_confidence)
            self.min_count_var  = tk.IntVar(value=cfg.min_total_count)
            self.min_run_var    = tk.IntVar(value=cfg.min_consecutive_run)
            self.scan_only_var  = tk.BooleanVar(value=cfg.scan_only)
            self.backup_var     = tk.BooleanVar(value=cfg.backup)
            self.verbose_var    = tk.BooleanVar(value=True)
            self.status_var     = tk.StringVar(value='就绪')
            self._build()
            self.root.after(200,self._drain)

    def _build(self):
        outer=ttk.Frame(self.root,padding=6); outer.pack(fill='both',expand=True)
        io=ttk.Frame(outer); io.pack(fill='x')
        ttk.Label(io,text='目录').grid(row=0,column=0,sticky='e')
        ttk.Entry(io,textvariable=self.dir_var,width=50).grid(row=0,column=1,sticky='we')
        ttk.Button(io,text='选择',command=self._pick_dir,width=5).grid(row=0,column=2,padx=2)
        io.columnconfigure(1,weight=1)
        opt_vars={'extensions':self.ext_var,'strategy':self.strategy_var,'tld':self.tld_var,
                  'min_confidence':self.min_conf_var,'min_count':self.min_count_var,'min_run':self.min_run_var,
                  'scan_only':self.scan_only_var,'backup':self.backup_var,'verbose':self.verbose_var}
        self.options_section=OptionsSection(outer,opt_vars)
        self.options_section.widget().pack(fill='x',pady=4)
        bar=ttk.Frame(outer); bar.pack(fill='x',pady=4)
        ttk.Label(bar,textvariable=self.status_var,foreground='blue').pack(side='left')
        ttk.Button(bar,text='取消',command=self._cancel).pack(side='right',padx=4)
        ttk.Button(bar,text='开始',command=self._start).pack(side='right',padx=4)
        log_frame=ttk.Frame(outer); log_frame.pack(fill='both',expand=True,pady=(6,0))
        self.log_view=LogView(log_frame)
        self.log_view.widget().pack(fill='both',expand=True)

    def _pick_dir(self):
        d=filedialog.askdirectory();
        if d: self.dir_var.set(d)

    def _collect(self)->Config:
        return Config(
            target_directory=self.dir_var.get().strip(),
            extensions=self.ext_var.get(),
            min_confidence=float(self.min_conf_var.get()),
            min_total_count=int(self.min_count_var.get()),
            min_consecutive_run=int(self.min_run_var.get()),
            scan_only=self.scan_only_var.get(),
            backup=self.backup_var.get(),
            verbose=self.verbose_var.get(),
            locale_hint=self.tld_var.get().strip() or None,
            strategy=self.strategy_var.get(),
        )

    def _start(self):
        if self.worker and self.worker.is_alive():
            messagebox.showinfo('提示','任务正在执行'); return
        try:
            config=self._collect()
        except (ValueError,tk.TclError) as e:
            messagebox.showwarning('参数错误',str(e)); return
        if not config.scan_only and not config.backup:
            if not messagebox.askyesno('确认','未勾选备份, 转换将直接覆盖原文件, 继续?'):
                return
        self.stop_flag.clear()
        self.log_view.clear()
        self.status_var.set('开始...')
        self.worker=threading.Thread(target=self._run,args=(config,),daemon=True); self.worker.start()

    def _cancel(self):
        if self.worker and self.worker.is_alive():
            self.stop_flag.set()
            self.status_var.set('取消中...')

    def _log(self,msg):
        self.q.put(msg)

    def _run(self, config:Config):
        try:
            summary=process_tree(config,self._log,self.stop_flag)
        except WalkError as e:
            self._log(f'STATUS 扫描目录失败: {e}'); return
        for path,(kind,msg) in summary.ledger.items():
            if kind is ErrorKind.DIRECTORY:
                self._log(f'LOG\tFAIL\t{path}\t\t目录读取失败: {msg}')

    def _drain(self):
        try:
            while True:
                m=self.q.get_nowait(); self.log_view.add_raw(m)
                if m.startswith('STATUS '): self.status_var.set(m[7:])
        except queue.Empty:
            pass
        self.root.after(120,self._drain)


def launch(config:Optional[Config]=None):
    root=tk.Tk(); GBKConvertApp(root,config); root.mainloop()
